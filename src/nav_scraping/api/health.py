from fastapi import APIRouter

from .deps import get_nav_service

router = APIRouter()


@router.get("/")
def read_root():
    return {"message": "NAV Scraping Online"}


@router.get("/health")
def health_check():
    service = get_nav_service()
    return {"status": "ok", "sources": [extractor.name for extractor in service.extractors]}
