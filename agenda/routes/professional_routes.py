from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from agenda.core import config
from agenda.database import get_db
from agenda.repositories.people import SqlPersonDirectory
from agenda.routes.common import database_unavailable, ensure_database_ready
from agenda.services.people import search_professionals

router = APIRouter(tags=['professionals'])


class ProfessionalListItemResponse(BaseModel):
    id: str
    first_name: str
    last_name: str
    full_name: str


class ProfessionalSearchResponse(BaseModel):
    items: list[ProfessionalListItemResponse]
    total: int
    page: int
    limit: int
    total_pages: int


@router.get('', response_model=ProfessionalSearchResponse)
def list_professionals(
    search: str | None = Query(default=None),
    page: int = Query(default=1),
    limit: int = Query(default=config.SEARCH_DEFAULT_LIMIT),
    db: Session = Depends(get_db),
):
    ensure_database_ready()

    try:
        result = search_professionals(SqlPersonDirectory(db), search, page, limit)
    except SQLAlchemyError as exc:
        raise database_unavailable() from exc

    return ProfessionalSearchResponse(
        items=[
            ProfessionalListItemResponse(
                id=professional.id,
                first_name=professional.first_name,
                last_name=professional.last_name,
                full_name=professional.full_name,
            )
            for professional in result.items
        ],
        total=result.total,
        page=result.page,
        limit=result.limit,
        total_pages=result.total_pages,
    )
