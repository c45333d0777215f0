"""
Tests for the pages API endpoints.

Pages live in the in-memory repository wired by the ``api`` fixture.
"""


# ── Helpers ──────────────────────────────────────────────────────────

CREATOR = {"X-User-Id": "creator-1", "X-User-Role": "CREATOR"}
OTHER_CREATOR = {"X-User-Id": "creator-2", "X-User-Role": "CREATOR"}
BASE = "/api/v1/pages"


def _create(api, slug: str = "atelier-lune", headers: dict = CREATOR) -> dict:
    response = api.client.post(
        BASE, json={"slug": slug, "title": "Atelier Lune"}, headers=headers
    )
    assert response.status_code == 201
    return response.json()


def _add(api, page_id: str, title: str, type: str = "ABOUT") -> dict:
    response = api.client.post(
        f"{BASE}/{page_id}/sections", json={"type": type, "title": title}, headers=CREATOR
    )
    assert response.status_code == 201
    return response.json()


# ═════════════════════════════════════════════════════════════════════
# Pages
# ═════════════════════════════════════════════════════════════════════


class TestPageEndpoints:
    def test_create_normalizes_slug(self, api) -> None:
        body = _create(api, slug="  Atelier-Lune ")
        assert body["slug"] == "atelier-lune"
        assert body["status"] == "DRAFT"
        assert body["sections"] == []

    def test_create_with_invalid_slug(self, api) -> None:
        response = api.client.post(
            BASE, json={"slug": "atelier lune", "title": "Atelier"}, headers=CREATOR
        )
        assert response.status_code == 400
        assert response.json()["detail"] == (
            "Le slug ne peut contenir que des lettres minuscules, chiffres et tirets"
        )

    def test_slug_must_be_unique(self, api) -> None:
        _create(api)
        response = api.client.post(
            BASE, json={"slug": "atelier-lune", "title": "Autre"}, headers=OTHER_CREATOR
        )
        assert response.json()["detail"] == "Ce slug est deja utilise"

    def test_list_my_pages(self, api) -> None:
        _create(api, slug="page-a")
        _create(api, slug="page-b")
        _create(api, slug="page-c", headers=OTHER_CREATOR)

        body = api.client.get(BASE, headers=CREATOR).json()

        assert sorted(p["slug"] for p in body) == ["page-a", "page-b"]

    def test_other_creator_cannot_read(self, api) -> None:
        page = _create(api)
        response = api.client.get(f"{BASE}/{page['id']}", headers=OTHER_CREATOR)
        assert response.status_code == 400
        assert response.json()["detail"] == "Acces non autorise"

    def test_update_settings(self, api) -> None:
        page = _create(api)

        body = api.client.patch(
            f"{BASE}/{page['id']}",
            json={"title": "Atelier Soleil", "slug": "atelier-soleil"},
            headers=CREATOR,
        ).json()

        assert body["title"] == "Atelier Soleil"
        assert body["slug"] == "atelier-soleil"

    def test_delete(self, api) -> None:
        page = _create(api)

        response = api.client.delete(f"{BASE}/{page['id']}", headers=CREATOR)

        assert response.status_code == 204
        assert api.client.get(f"{BASE}/{page['id']}", headers=CREATOR).json()["detail"] == (
            "Page non trouvee"
        )

    def test_requires_creator(self, api) -> None:
        customer = {"X-User-Id": "customer-1", "X-User-Role": "CUSTOMER"}
        assert api.client.get(BASE, headers=customer).status_code == 403


class TestPublication:
    def test_public_view_needs_publication(self, api) -> None:
        page = _create(api)

        hidden = api.client.get(f"{BASE}/public/atelier-lune")
        api.client.post(f"{BASE}/{page['id']}/publish", headers=CREATOR)
        shown = api.client.get(f"{BASE}/public/atelier-lune")

        assert hidden.status_code == 400
        assert hidden.json()["detail"] == "Page non trouvee"
        assert shown.status_code == 200
        assert shown.json()["slug"] == "atelier-lune"
        assert "creator_id" not in shown.json()

    def test_publish_twice(self, api) -> None:
        page = _create(api)
        api.client.post(f"{BASE}/{page['id']}/publish", headers=CREATOR)

        response = api.client.post(f"{BASE}/{page['id']}/publish", headers=CREATOR)

        assert response.json()["detail"] == "La page est deja publiee"

    def test_unpublish(self, api) -> None:
        page = _create(api)
        api.client.post(f"{BASE}/{page['id']}/publish", headers=CREATOR)

        body = api.client.post(f"{BASE}/{page['id']}/unpublish", headers=CREATOR).json()

        assert body["status"] == "DRAFT"
        assert api.client.get(f"{BASE}/public/atelier-lune").status_code == 400

    def test_public_view_hides_invisible_sections(self, api) -> None:
        page = _create(api)
        _add(api, page["id"], "Hero", type="HERO")
        hidden = _add(api, page["id"], "Brouillon")
        api.client.patch(
            f"{BASE}/{page['id']}/sections/{hidden['id']}",
            json={"is_visible": False},
            headers=CREATOR,
        )
        api.client.post(f"{BASE}/{page['id']}/publish", headers=CREATOR)

        body = api.client.get(f"{BASE}/public/atelier-lune").json()

        assert [s["title"] for s in body["sections"]] == ["Hero"]


# ═════════════════════════════════════════════════════════════════════
# Sections
# ═════════════════════════════════════════════════════════════════════


class TestSectionEndpoints:
    def test_sections_are_appended(self, api) -> None:
        page = _create(api)

        first = _add(api, page["id"], "Hero", type="HERO")
        second = _add(api, page["id"], "À propos")

        assert first["position"] == 0
        assert second["position"] == 1

    def test_insert_shifts_following_sections(self, api) -> None:
        page = _create(api)
        _add(api, page["id"], "A")
        _add(api, page["id"], "B")

        api.client.post(
            f"{BASE}/{page['id']}/sections",
            json={"type": "CONTACT", "title": "Inséré", "position": 0},
            headers=CREATOR,
        )
        body = api.client.get(f"{BASE}/{page['id']}", headers=CREATOR).json()

        assert [s["title"] for s in body["sections"]] == ["Inséré", "A", "B"]
        assert [s["position"] for s in body["sections"]] == [0, 1, 2]

    def test_unknown_section_type(self, api) -> None:
        page = _create(api)
        response = api.client.post(
            f"{BASE}/{page['id']}/sections", json={"type": "BANNER"}, headers=CREATOR
        )
        assert response.json()["detail"] == "Type de section invalide: BANNER"

    def test_reorder(self, api) -> None:
        page = _create(api)
        a = _add(api, page["id"], "A")
        b = _add(api, page["id"], "B")
        c = _add(api, page["id"], "C")

        response = api.client.put(
            f"{BASE}/{page['id']}/sections/order",
            json={"section_ids": [c["id"], a["id"], b["id"]]},
            headers=CREATOR,
        )
        body = api.client.get(f"{BASE}/{page['id']}", headers=CREATOR).json()

        assert response.status_code == 200
        assert [s["title"] for s in body["sections"]] == ["C", "A", "B"]

    def test_reorder_with_missing_ids(self, api) -> None:
        page = _create(api)
        a = _add(api, page["id"], "A")
        _add(api, page["id"], "B")

        response = api.client.put(
            f"{BASE}/{page['id']}/sections/order",
            json={"section_ids": [a["id"]]},
            headers=CREATOR,
        )

        assert response.json()["detail"] == "Le nombre de sections ne correspond pas"

    def test_update_section(self, api) -> None:
        page = _create(api)
        section = _add(api, page["id"], "A")

        body = api.client.patch(
            f"{BASE}/{page['id']}/sections/{section['id']}",
            json={"title": "Notre histoire", "content": {"text": "Depuis 2019"}},
            headers=CREATOR,
        ).json()

        assert body["title"] == "Notre histoire"
        assert body["content"] == {"text": "Depuis 2019"}

    def test_remove_closes_the_gap(self, api) -> None:
        page = _create(api)
        a = _add(api, page["id"], "A")
        _add(api, page["id"], "B")

        response = api.client.delete(
            f"{BASE}/{page['id']}/sections/{a['id']}", headers=CREATOR
        )
        body = api.client.get(f"{BASE}/{page['id']}", headers=CREATOR).json()

        assert response.status_code == 204
        assert [(s["title"], s["position"]) for s in body["sections"]] == [("B", 0)]
