"""API tests for portfolio content: profile page, skills, projects, entries, blog."""

import unittest

from tests.api_support import API, ApiHarness

PROFILE = {
    "slug": "alice-dev",
    "fullName": "Alice Developer",
    "headline": "Backend engineer",
    "location": "Kathmandu",
}


class PortfolioTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.h = ApiHarness()
        self.client = self.h.client
        self.h.create_user("alice@example.com", "secret123", name="alice")
        self.h.login("alice@example.com", "secret123")

    def tearDown(self) -> None:
        self.h.close()

    def create_profile(self) -> dict:
        resp = self.client.post(f"{API}/profile", json=PROFILE)
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()


class TestProfile(PortfolioTestCase):
    def test_create_and_fetch_by_slug(self) -> None:
        created = self.create_profile()
        self.assertEqual(created["fullName"], "Alice Developer")

        resp = self.h.new_client().get(f"{API}/profile", params={"slug": "alice-dev"})
        self.assertEqual(resp.status_code, 200)
        page = resp.json()
        self.assertEqual(page["slug"], "alice-dev")
        for section in ("socialLinks", "workExperience", "education", "projects", "profileSkills"):
            self.assertEqual(page[section], [])

    def test_second_profile_for_same_user_is_400(self) -> None:
        self.create_profile()
        resp = self.client.post(f"{API}/profile", json={**PROFILE, "slug": "another"})
        self.assertEqual(resp.status_code, 400)

    def test_missing_profile_is_404(self) -> None:
        self.assertEqual(self.client.get(f"{API}/profile", params={"slug": "nobody"}).status_code, 404)

    def test_update_and_delete(self) -> None:
        self.create_profile()
        resp = self.client.put(f"{API}/profile", json={"slug": "alice-dev", "headline": "Staff engineer"})
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(resp.json()["headline"], "Staff engineer")
        self.assertEqual(resp.json()["fullName"], "Alice Developer")

        resp = self.client.delete(f"{API}/profile", params={"slug": "alice-dev"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(self.client.get(f"{API}/profile", params={"slug": "alice-dev"}).status_code, 404)

    def test_writes_require_auth(self) -> None:
        resp = self.h.new_client().post(f"{API}/profile", json=PROFILE)
        self.assertEqual(resp.status_code, 401)

    def test_profile_page_orders_sections_and_hides_inactive_projects(self) -> None:
        self.create_profile()
        for start in ("2018-09-01T00:00:00Z", "2022-09-01T00:00:00Z"):
            self.client.post(
                f"{API}/education",
                json={"institution": f"School {start[:4]}", "degree": "BSc", "startDate": start},
            )
        self.client.post(f"{API}/social-links", json={"platform": "LinkedIn", "url": "https://l.example.com", "sortOrder": 2})
        self.client.post(f"{API}/social-links", json={"platform": "GitHub", "url": "https://g.example.com", "sortOrder": 1})
        self.client.post(f"{API}/projects", json={"title": "Live", "slug": "live"})
        self.client.post(f"{API}/projects", json={"title": "Old", "slug": "old", "isActive": False})

        page = self.client.get(f"{API}/profile", params={"slug": "alice-dev"}).json()
        self.assertEqual([e["institution"] for e in page["education"]], ["School 2022", "School 2018"])
        self.assertEqual([s["platform"] for s in page["socialLinks"]], ["GitHub", "LinkedIn"])
        self.assertEqual([p["slug"] for p in page["projects"]], ["live"])


class TestSkills(PortfolioTestCase):
    def test_create_list_and_duplicate(self) -> None:
        self.assertEqual(self.client.post(f"{API}/skills", json={"name": "Python"}).status_code, 201)
        self.assertEqual(self.client.post(f"{API}/skills", json={"name": "Go", "category": "language"}).status_code, 201)
        dup = self.client.post(f"{API}/skills", json={"name": "Python"})
        self.assertEqual(dup.status_code, 409)
        names = [s["name"] for s in self.client.get(f"{API}/skills").json()]
        self.assertEqual(names, ["Go", "Python"])


class TestProjects(PortfolioTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.create_profile()

    def test_create_links_technologies_and_mirrors_tags(self) -> None:
        self.client.post(f"{API}/skills", json={"name": "Python"})
        resp = self.client.post(
            f"{API}/projects",
            json={"title": "Portfolio", "slug": "portfolio", "technologies": ["Python", "FastAPI"], "isFeatured": True},
        )
        self.assertEqual(resp.status_code, 201, resp.text)
        project = resp.json()
        self.assertEqual(project["tags"], ["Python", "FastAPI"])
        self.assertEqual(
            sorted(ps["skill"]["name"] for ps in project["projectSkills"]), ["FastAPI", "Python"]
        )
        skills = [s["name"] for s in self.client.get(f"{API}/skills").json()]
        self.assertEqual(skills, ["FastAPI", "Python"])

    def test_update_replaces_technologies(self) -> None:
        project = self.client.post(
            f"{API}/projects", json={"title": "P", "slug": "p", "technologies": ["Python"]}
        ).json()
        resp = self.client.put(f"{API}/projects/{project['id']}", json={"technologies": ["Rust"], "title": "P2"})
        self.assertEqual(resp.status_code, 200, resp.text)
        updated = resp.json()
        self.assertEqual(updated["title"], "P2")
        self.assertEqual(updated["tags"], ["Rust"])
        self.assertEqual([ps["skill"]["name"] for ps in updated["projectSkills"]], ["Rust"])

    def test_filters_get_and_delete(self) -> None:
        featured = self.client.post(f"{API}/projects", json={"title": "F", "slug": "f", "isFeatured": True}).json()
        self.client.post(f"{API}/projects", json={"title": "N", "slug": "n"})

        all_projects = self.client.get(f"{API}/projects").json()
        self.assertEqual(len(all_projects), 2)
        only_featured = self.client.get(f"{API}/projects", params={"featured": "true"}).json()
        self.assertEqual([p["slug"] for p in only_featured], ["f"])

        self.assertEqual(self.client.get(f"{API}/projects/{featured['id']}").status_code, 200)
        self.assertEqual(self.client.delete(f"{API}/projects/{featured['id']}").status_code, 200)
        self.assertEqual(self.client.get(f"{API}/projects/{featured['id']}").status_code, 404)

    def test_duplicate_slug_conflicts(self) -> None:
        self.client.post(f"{API}/projects", json={"title": "A", "slug": "same"})
        resp = self.client.post(f"{API}/projects", json={"title": "B", "slug": "same"})
        self.assertEqual(resp.status_code, 409)


class TestProfileEntries(PortfolioTestCase):
    def test_work_experience_crud(self) -> None:
        self.create_profile()
        created = self.client.post(
            f"{API}/work-experience",
            json={"company": "Acme", "position": "Engineer", "startDate": "2021-01-01T00:00:00Z"},
        )
        self.assertEqual(created.status_code, 201, created.text)
        entry_id = created.json()["id"]

        updated = self.client.put(f"{API}/work-experience/{entry_id}", json={"position": "Lead"})
        self.assertEqual(updated.json()["position"], "Lead")
        self.assertEqual(updated.json()["company"], "Acme")

        self.assertEqual(len(self.client.get(f"{API}/work-experience").json()), 1)
        self.assertEqual(self.client.delete(f"{API}/work-experience/{entry_id}").status_code, 200)
        self.assertEqual(self.client.get(f"{API}/work-experience/{entry_id}").status_code, 404)

    def test_create_without_profile_is_400(self) -> None:
        resp = self.client.post(
            f"{API}/education",
            json={"institution": "Uni", "degree": "BSc", "startDate": "2020-01-01T00:00:00Z"},
        )
        self.assertEqual(resp.status_code, 400)

    def test_missing_entry_is_404(self) -> None:
        self.assertEqual(self.client.put(f"{API}/social-links/missing", json={"icon": "x"}).status_code, 404)
        self.assertEqual(self.client.delete(f"{API}/education/missing").status_code, 404)


class TestBlog(PortfolioTestCase):
    def test_post_requires_profile(self) -> None:
        resp = self.client.post(f"{API}/blog", json={"title": "T", "slug": "t", "content": "Body"})
        self.assertEqual(resp.status_code, 400)

    def test_crud_and_published_filter(self) -> None:
        self.create_profile()
        draft = self.client.post(f"{API}/blog", json={"title": "Draft", "slug": "draft", "content": "..."})
        self.assertEqual(draft.status_code, 201, draft.text)
        self.assertEqual(draft.json()["author"]["fullName"], "Alice Developer")
        self.client.post(
            f"{API}/blog",
            json={"title": "Live", "slug": "live", "content": "...", "publishedAt": "2026-02-01T00:00:00Z", "tags": ["python"]},
        )

        public = self.h.new_client()
        self.assertEqual(len(public.get(f"{API}/blog").json()), 2)
        published = public.get(f"{API}/blog", params={"published": "true"}).json()
        self.assertEqual([p["slug"] for p in published], ["live"])
        self.assertEqual(public.get(f"{API}/blog/live").json()["tags"], ["python"])
        self.assertEqual(public.get(f"{API}/blog/nope").status_code, 404)

        post_id = draft.json()["id"]
        updated = self.client.put(f"{API}/blog/{post_id}", json={"summary": "Short"})
        self.assertEqual(updated.json()["summary"], "Short")
        self.assertEqual(self.client.delete(f"{API}/blog/{post_id}").status_code, 200)
        self.assertEqual(public.get(f"{API}/blog/draft").status_code, 404)
