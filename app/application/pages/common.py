"""
Helpers shared by the page use cases.
"""

from app.domain.pages.entities import CreatorPage
from app.domain.pages.ports import PageRepository
from app.shared.domain import Result

PAGE_NOT_FOUND = "Page non trouvee"
ACCESS_DENIED = "Acces non autorise"


def load_owned_page(
    page_repo: PageRepository, page_id: str, creator_id: str
) -> Result[CreatorPage]:
    """Fetch a page and check that ``creator_id`` owns it."""
    page = page_repo.find_by_id(page_id)
    if page is None:
        return Result.fail(PAGE_NOT_FOUND)
    if not page.is_owned_by(creator_id):
        return Result.fail(ACCESS_DENIED)
    return Result.ok(page)
