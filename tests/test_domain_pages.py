"""
Tests for the pages domain layer.

Covers slug rules, page status changes and the section ordering kept
by the CreatorPage aggregate.
"""

from app.domain.pages.entities import (
    CreatorPage,
    PageSection,
    PageStatus,
    SectionType,
    normalize_slug,
)


# ── Helpers ──────────────────────────────────────────────────────────


def _page(slug: str = "atelier-lune") -> CreatorPage:
    return CreatorPage.create("creator-1", slug, "Atelier Lune").value


def _page_with_sections(*titles: str) -> CreatorPage:
    page = _page()
    for title in titles:
        page.add_section(SectionType.CUSTOM, title)
    return page


def _titles(page: CreatorPage) -> list[str]:
    return [s.title for s in page.sections]


# ═════════════════════════════════════════════════════════════════════
# Slugs
# ═════════════════════════════════════════════════════════════════════


class TestNormalizeSlug:
    def test_lowercases_and_trims(self) -> None:
        assert normalize_slug("  Atelier-Lune ").value == "atelier-lune"

    def test_too_short(self) -> None:
        assert normalize_slug("ab").error == "Le slug doit contenir au moins 3 caracteres"

    def test_too_long(self) -> None:
        assert normalize_slug("a" * 51).is_failure
        assert normalize_slug("a" * 50).is_success

    def test_invalid_characters(self) -> None:
        for slug in ("mon slug", "mon_slug", "-debut", "fin-", "double--tiret", "café"):
            assert normalize_slug(slug).is_failure, slug

    def test_required(self) -> None:
        assert normalize_slug(None).error == "Le slug est requis"
        assert normalize_slug("   ").error == "Le slug est requis"


# ═════════════════════════════════════════════════════════════════════
# CreatorPage
# ═════════════════════════════════════════════════════════════════════


class TestCreatorPage:
    def test_new_page_is_draft_without_sections(self) -> None:
        page = _page()
        assert page.status is PageStatus.DRAFT
        assert page.sections == []
        assert page.published_at is None

    def test_create_validates_title(self) -> None:
        result = CreatorPage.create("creator-1", "atelier", "  ")
        assert result.error == "Le titre de la page est requis"

    def test_create_validates_description(self) -> None:
        result = CreatorPage.create("creator-1", "atelier", "Atelier", description="x" * 501)
        assert result.is_failure

    def test_blank_description_becomes_none(self) -> None:
        page = CreatorPage.create("creator-1", "atelier", "Atelier", description="  ").value
        assert page.description is None

    def test_publish_and_unpublish(self) -> None:
        page = _page()
        assert page.publish().is_success
        assert page.is_published
        assert page.published_at is not None
        assert page.publish().error == "La page est deja publiee"
        assert page.unpublish().is_success
        assert page.unpublish().error == "La page est deja en brouillon"

    def test_update_settings_is_all_or_nothing(self) -> None:
        page = _page()
        result = page.update_settings(title="Nouveau titre", slug="x")
        assert result.is_failure
        assert page.title == "Atelier Lune"
        assert page.slug == "atelier-lune"

    def test_update_settings_applies_given_fields(self) -> None:
        page = _page()
        assert page.update_settings(slug="Nouvelle-Boutique").is_success
        assert page.slug == "nouvelle-boutique"
        assert page.title == "Atelier Lune"

    def test_reconstitute_rejects_unknown_status(self) -> None:
        assert CreatorPage.reconstitute(status="ARCHIVED", sections=[]).is_failure


# ═════════════════════════════════════════════════════════════════════
# Sections
# ═════════════════════════════════════════════════════════════════════


class TestPageSections:
    def test_sections_are_appended(self) -> None:
        page = _page_with_sections("Hero", "A propos", "Contact")
        assert _titles(page) == ["Hero", "A propos", "Contact"]
        assert [s.position for s in page.sections] == [0, 1, 2]

    def test_insert_shifts_following_sections(self) -> None:
        page = _page_with_sections("Hero", "Contact")
        added = page.add_section(SectionType.ABOUT, "A propos", position=1)
        assert added.value.position == 1
        assert _titles(page) == ["Hero", "A propos", "Contact"]
        assert [s.position for s in page.sections] == [0, 1, 2]

    def test_position_past_end_is_clamped(self) -> None:
        page = _page_with_sections("Hero")
        added = page.add_section(SectionType.CONTACT, "Contact", position=42)
        assert added.value.position == 1

    def test_negative_position(self) -> None:
        result = _page().add_section(SectionType.HERO, "Hero", position=-1)
        assert result.error == "La position doit etre positive"

    def test_remove_closes_the_gap(self) -> None:
        page = _page_with_sections("Hero", "A propos", "Contact")
        middle = page.sections[1]
        assert page.remove_section(middle.id).is_success
        assert _titles(page) == ["Hero", "Contact"]
        assert [s.position for s in page.sections] == [0, 1]

    def test_remove_unknown(self) -> None:
        assert _page().remove_section("nope").error == "Section non trouvee"

    def test_reorder(self) -> None:
        page = _page_with_sections("Hero", "A propos", "Contact")
        ids = [s.id for s in page.sections]
        assert page.reorder_sections([ids[2], ids[0], ids[1]]).is_success
        assert _titles(page) == ["Contact", "Hero", "A propos"]

    def test_reorder_requires_every_section(self) -> None:
        page = _page_with_sections("Hero", "Contact")
        ids = [s.id for s in page.sections]
        assert page.reorder_sections(ids[:1]).error == "Le nombre de sections ne correspond pas"
        assert page.reorder_sections([ids[0], "ghost"]).error == "Section ghost non trouvee"
        assert _titles(page) == ["Hero", "Contact"]

    def test_hidden_sections_are_not_visible(self) -> None:
        page = _page_with_sections("Hero", "Contact")
        page.sections[0].hide()
        assert [s.title for s in page.visible_sections] == ["Contact"]


class TestPageSection:
    def test_update_title_requires_value(self) -> None:
        section = PageSection.create("page-1", SectionType.HERO, "Hero", 0).value
        assert section.update_title(" ").error == "Le titre de la section est requis"

    def test_content_is_copied(self) -> None:
        content = {"headline": "Bienvenue"}
        section = PageSection.create("page-1", SectionType.HERO, "Hero", 0, content).value
        content["headline"] = "Autre"
        assert section.content == {"headline": "Bienvenue"}

    def test_section_type_from_value(self) -> None:
        assert SectionType.from_value("BENTO_GRID").value is SectionType.BENTO_GRID
        assert SectionType.from_value("CAROUSEL").is_failure
