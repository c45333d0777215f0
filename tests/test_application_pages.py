"""
Tests for the pages application layer (use cases).

Every use case runs against the in-memory page repository.
"""

from app.application.pages.create_page import CreatePageUseCase
from app.application.pages.delete_page import DeletePageUseCase
from app.application.pages.dtos import (
    AddSectionCommand,
    CreatePageCommand,
    GetCreatorPageQuery,
    GetPublicPageQuery,
    ListCreatorPagesQuery,
    PageActionCommand,
    RemoveSectionCommand,
    ReorderSectionsCommand,
    UpdatePageSettingsCommand,
    UpdateSectionCommand,
)
from app.application.pages.get_creator_page import (
    GetCreatorPageUseCase,
    ListCreatorPagesUseCase,
)
from app.application.pages.get_public_page import GetPublicPageUseCase
from app.application.pages.manage_sections import (
    AddSectionUseCase,
    RemoveSectionUseCase,
    ReorderSectionsUseCase,
    UpdateSectionUseCase,
)
from app.application.pages.publish_page import PublishPageUseCase, UnpublishPageUseCase
from app.application.pages.update_page_settings import UpdatePageSettingsUseCase
from app.infrastructure.pages.in_memory_page_repository import InMemoryPageRepository


# ── Helpers ──────────────────────────────────────────────────────────


def _create(
    repo: InMemoryPageRepository, slug: str = "atelier-lune", creator_id: str = "creator-1"
) -> str:
    result = CreatePageUseCase(repo).execute(
        CreatePageCommand(creator_id=creator_id, slug=slug, title="Atelier Lune")
    )
    return result.value.id


def _add(repo: InMemoryPageRepository, page_id: str, title: str, type: str = "CUSTOM") -> str:
    result = AddSectionUseCase(repo).execute(
        AddSectionCommand(page_id=page_id, creator_id="creator-1", type=type, title=title)
    )
    return result.value.id


# ═════════════════════════════════════════════════════════════════════
# Page lifecycle
# ═════════════════════════════════════════════════════════════════════


class TestCreatePageUseCase:
    def test_creates_draft_page(self) -> None:
        repo = InMemoryPageRepository()
        result = CreatePageUseCase(repo).execute(
            CreatePageCommand(creator_id="creator-1", slug="Atelier-Lune", title="Atelier Lune")
        )
        assert result.value.status == "DRAFT"
        assert result.value.slug == "atelier-lune"
        assert repo.find_by_slug("atelier-lune") is not None

    def test_duplicate_slug(self) -> None:
        repo = InMemoryPageRepository()
        _create(repo)
        result = CreatePageUseCase(repo).execute(
            CreatePageCommand(creator_id="creator-2", slug="atelier-lune", title="Autre")
        )
        assert result.error == "Ce slug est deja utilise"

    def test_invalid_slug(self) -> None:
        result = CreatePageUseCase(InMemoryPageRepository()).execute(
            CreatePageCommand(creator_id="creator-1", slug="a b", title="Atelier")
        )
        assert result.is_failure


class TestUpdatePageSettingsUseCase:
    def test_updates_title_and_slug(self) -> None:
        repo = InMemoryPageRepository()
        page_id = _create(repo)
        result = UpdatePageSettingsUseCase(repo).execute(
            UpdatePageSettingsCommand(
                page_id=page_id, creator_id="creator-1", title="Lune & Co", slug="lune-co"
            )
        )
        assert result.value.title == "Lune & Co"
        assert repo.find_by_id(page_id).slug == "lune-co"

    def test_keeping_own_slug_is_allowed(self) -> None:
        repo = InMemoryPageRepository()
        page_id = _create(repo)
        result = UpdatePageSettingsUseCase(repo).execute(
            UpdatePageSettingsCommand(page_id=page_id, creator_id="creator-1", slug="atelier-lune")
        )
        assert result.is_success

    def test_slug_taken_by_another_page(self) -> None:
        repo = InMemoryPageRepository()
        _create(repo, slug="deja-pris", creator_id="creator-2")
        page_id = _create(repo)
        result = UpdatePageSettingsUseCase(repo).execute(
            UpdatePageSettingsCommand(page_id=page_id, creator_id="creator-1", slug="deja-pris")
        )
        assert result.error == "Ce slug est deja utilise"

    def test_other_creator_is_denied(self) -> None:
        repo = InMemoryPageRepository()
        page_id = _create(repo)
        result = UpdatePageSettingsUseCase(repo).execute(
            UpdatePageSettingsCommand(page_id=page_id, creator_id="creator-2", title="Pirate")
        )
        assert result.error == "Acces non autorise"


class TestPublishPageUseCase:
    def test_publish_then_visible_publicly(self) -> None:
        repo = InMemoryPageRepository()
        page_id = _create(repo)

        published = PublishPageUseCase(repo).execute(PageActionCommand(page_id, "creator-1"))
        public = GetPublicPageUseCase(repo).execute(GetPublicPageQuery(slug="Atelier-Lune"))

        assert published.value.status == "PUBLISHED"
        assert public.value.id == page_id

    def test_draft_is_not_public(self) -> None:
        repo = InMemoryPageRepository()
        _create(repo)
        result = GetPublicPageUseCase(repo).execute(GetPublicPageQuery(slug="atelier-lune"))
        assert result.error == "Page non trouvee"

    def test_unpublish(self) -> None:
        repo = InMemoryPageRepository()
        page_id = _create(repo)
        PublishPageUseCase(repo).execute(PageActionCommand(page_id, "creator-1"))
        result = UnpublishPageUseCase(repo).execute(PageActionCommand(page_id, "creator-1"))
        assert result.value.status == "DRAFT"

    def test_publish_twice(self) -> None:
        repo = InMemoryPageRepository()
        page_id = _create(repo)
        PublishPageUseCase(repo).execute(PageActionCommand(page_id, "creator-1"))
        result = PublishPageUseCase(repo).execute(PageActionCommand(page_id, "creator-1"))
        assert result.error == "La page est deja publiee"


class TestDeletePageUseCase:
    def test_deletes_own_page(self) -> None:
        repo = InMemoryPageRepository()
        page_id = _create(repo)
        assert DeletePageUseCase(repo).execute(PageActionCommand(page_id, "creator-1")).is_success
        assert repo.find_by_id(page_id) is None

    def test_unknown_page(self) -> None:
        result = DeletePageUseCase(InMemoryPageRepository()).execute(
            PageActionCommand("missing", "creator-1")
        )
        assert result.error == "Page non trouvee"


class TestReadPages:
    def test_get_creator_page(self) -> None:
        repo = InMemoryPageRepository()
        page_id = _create(repo)
        result = GetCreatorPageUseCase(repo).execute(GetCreatorPageQuery(page_id, "creator-1"))
        assert result.value.slug == "atelier-lune"

    def test_get_creator_page_of_someone_else(self) -> None:
        repo = InMemoryPageRepository()
        page_id = _create(repo)
        result = GetCreatorPageUseCase(repo).execute(GetCreatorPageQuery(page_id, "creator-2"))
        assert result.error == "Acces non autorise"

    def test_list_creator_pages(self) -> None:
        repo = InMemoryPageRepository()
        _create(repo, slug="premiere")
        _create(repo, slug="seconde")
        _create(repo, slug="autre-createur", creator_id="creator-2")
        result = ListCreatorPagesUseCase(repo).execute(ListCreatorPagesQuery("creator-1"))
        assert {p.slug for p in result.value} == {"premiere", "seconde"}


# ═════════════════════════════════════════════════════════════════════
# Sections
# ═════════════════════════════════════════════════════════════════════


class TestSectionUseCases:
    def test_add_section_persists(self) -> None:
        repo = InMemoryPageRepository()
        page_id = _create(repo)
        _add(repo, page_id, "Hero", type="HERO")
        page = repo.find_by_id(page_id)
        assert [s.type.value for s in page.sections] == ["HERO"]

    def test_add_section_with_unknown_type(self) -> None:
        repo = InMemoryPageRepository()
        page_id = _create(repo)
        result = AddSectionUseCase(repo).execute(
            AddSectionCommand(page_id=page_id, creator_id="creator-1", type="VIDEO", title="x")
        )
        assert result.error == "Type de section invalide: VIDEO"

    def test_update_section_hides_it_from_public_view(self) -> None:
        repo = InMemoryPageRepository()
        page_id = _create(repo)
        hero_id = _add(repo, page_id, "Hero")
        _add(repo, page_id, "Contact")
        PublishPageUseCase(repo).execute(PageActionCommand(page_id, "creator-1"))

        updated = UpdateSectionUseCase(repo).execute(
            UpdateSectionCommand(
                page_id=page_id,
                creator_id="creator-1",
                section_id=hero_id,
                title="Accueil",
                content={"headline": "Bonjour"},
                is_visible=False,
            )
        )
        public = GetPublicPageUseCase(repo).execute(GetPublicPageQuery("atelier-lune")).value

        assert updated.value.title == "Accueil"
        assert updated.value.content == {"headline": "Bonjour"}
        assert [s.title for s in public.sections] == ["Contact"]

    def test_update_unknown_section(self) -> None:
        repo = InMemoryPageRepository()
        page_id = _create(repo)
        result = UpdateSectionUseCase(repo).execute(
            UpdateSectionCommand(page_id=page_id, creator_id="creator-1", section_id="nope")
        )
        assert result.error == "Section non trouvee"

    def test_remove_section(self) -> None:
        repo = InMemoryPageRepository()
        page_id = _create(repo)
        first = _add(repo, page_id, "Hero")
        _add(repo, page_id, "Contact")

        RemoveSectionUseCase(repo).execute(RemoveSectionCommand(page_id, "creator-1", first))

        sections = repo.find_by_id(page_id).sections
        assert [(s.title, s.position) for s in sections] == [("Contact", 0)]

    def test_reorder_sections(self) -> None:
        repo = InMemoryPageRepository()
        page_id = _create(repo)
        a = _add(repo, page_id, "A")
        b = _add(repo, page_id, "B")

        result = ReorderSectionsUseCase(repo).execute(
            ReorderSectionsCommand(page_id, "creator-1", [b, a])
        )

        assert result.value.section_ids == [b, a]
        assert [s.title for s in repo.find_by_id(page_id).sections] == ["B", "A"]

    def test_reorder_with_missing_ids(self) -> None:
        repo = InMemoryPageRepository()
        page_id = _create(repo)
        _add(repo, page_id, "A")
        _add(repo, page_id, "B")
        result = ReorderSectionsUseCase(repo).execute(
            ReorderSectionsCommand(page_id, "creator-1", ["x"])
        )
        assert result.error == "Le nombre de sections ne correspond pas"
