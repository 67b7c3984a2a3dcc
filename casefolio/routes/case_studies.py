"""
Public case study routes.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from casefolio.models.case_study import CaseStudy
from casefolio.services.storage import DatabaseStorage, get_storage

router = APIRouter(prefix="/api/case-studies", tags=["case-studies"])
logger = logging.getLogger("casefolio.case_studies")


@router.get("")
async def list_case_studies(
    limit: Optional[int] = Query(None, ge=1),
    featured: Optional[bool] = Query(None),
    storage: DatabaseStorage = Depends(get_storage),
) -> List[CaseStudy]:
    """List published case studies, newest first."""
    try:
        return await storage.get_case_studies(limit=limit, featured=featured)
    except Exception as e:
        logger.error(f"Error fetching case studies: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch case studies")


@router.get("/{slug}")
async def get_case_study(slug: str, storage: DatabaseStorage = Depends(get_storage)) -> CaseStudy:
    try:
        case_study = await storage.get_case_study_by_slug(slug)
    except Exception as e:
        logger.error(f"Error fetching case study {slug}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch case study")

    if case_study is None:
        raise HTTPException(status_code=404, detail="Case study not found")

    return case_study
