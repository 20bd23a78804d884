from dataclasses import dataclass
from math import ceil

from agenda.core import config
from agenda.domain.exceptions import NotAProfessionalError, ProfessionalNotFoundError
from agenda.domain.people import Professional
from agenda.domain.ports import PersonDirectory


def resolve_professional(directory: PersonDirectory, professional_id: str) -> Professional:
    person = directory.resolve(professional_id)
    if person is None:
        raise ProfessionalNotFoundError()
    if not isinstance(person, Professional):
        raise NotAProfessionalError()
    return person


@dataclass(frozen=True)
class ProfessionalPage:
    items: list[Professional]
    total: int
    page: int
    limit: int
    total_pages: int


def search_professionals(
    directory: PersonDirectory,
    search: str | None,
    page: int = 1,
    limit: int = config.SEARCH_DEFAULT_LIMIT,
) -> ProfessionalPage:
    safe_page = max(1, int(page))
    safe_limit = min(config.SEARCH_MAX_LIMIT, max(1, int(limit)))
    normalized_search = search.strip() if search and search.strip() else None

    items, total = directory.search_professionals(normalized_search, safe_page, safe_limit)

    return ProfessionalPage(
        items=items,
        total=total,
        page=safe_page,
        limit=safe_limit,
        total_pages=ceil(total / safe_limit),
    )
