import pytest

from app.models import AdminRole
from app.services.auth import AuthService
from app.services.s3 import s3_service
from tests.conftest import ADMIN_EMAIL, ADMIN_PASSWORD


def create_post(client, headers, **fields):
    payload = {"title": "Cara Rapat Efektif", "content": "<p>Isi artikel</p>", **fields}
    return client.post("/api/v1/admin/blogs", json=payload, headers=headers)


class TestAuth:

    def test_admin_routes_require_token(self, client):
        assert client.get("/api/v1/admin/blogs").status_code == 401
        assert client.post("/api/v1/admin/faq", json={"question": "Q?", "answer": "A."}).status_code == 401

    def test_login_and_profile(self, client, create_admin):
        create_admin()
        response = client.post("/api/v1/auth/token", data={
            "username": ADMIN_EMAIL,
            "password": ADMIN_PASSWORD,
        })
        assert response.status_code == 200
        token = response.json()["access_token"]

        me = client.get("/api/v1/admin/me", headers={"Authorization": f"Bearer {token}"})
        assert me.status_code == 200
        assert me.json()["email"] == ADMIN_EMAIL
        assert me.json()["role"] == "content_manager"

    def test_login_wrong_password(self, client, create_admin):
        create_admin()
        response = client.post("/api/v1/auth/token", data={
            "username": ADMIN_EMAIL,
            "password": "salah",
        })
        assert response.status_code == 401

    def test_login_email_is_case_insensitive(self, client, create_admin):
        create_admin()
        response = client.post("/api/v1/auth/token", data={
            "username": ADMIN_EMAIL.upper(),
            "password": ADMIN_PASSWORD,
        })
        assert response.status_code == 200

    def test_wildcard_username_matches_nobody(self, client, create_admin):
        create_admin()
        response = client.post("/api/v1/auth/token", data={
            "username": "%",
            "password": ADMIN_PASSWORD,
        })
        assert response.status_code == 401

    def test_underscore_email_is_a_distinct_account(self, create_admin, session):
        create_admin(email="axb@rapatin.id")
        create_admin(email="a_b@rapatin.id")
        assert AuthService(session).get_user_by_email("a_b@rapatin.id").email == "a_b@rapatin.id"

    def test_invalid_token(self, client):
        response = client.get("/api/v1/admin/me", headers={"Authorization": "Bearer bukan-token"})
        assert response.status_code == 401

    def test_no_permission_check_route(self, client, admin_headers):
        response = client.get("/api/v1/admin/permissions/check", params={"permission": "blogs.read"}, headers=admin_headers)
        assert response.status_code == 404

    def test_viewer_cannot_write(self, client, create_admin):
        headers = create_admin(email="viewer@rapatin.id", role=AdminRole.VIEWER)
        assert client.get("/api/v1/admin/blogs", headers=headers).status_code == 200
        assert create_post(client, headers).status_code == 403

    def test_granular_permission_extends_role(self, client, create_admin):
        headers = create_admin(email="viewer@rapatin.id", role=AdminRole.VIEWER, permissions=["blogs.create"])
        assert create_post(client, headers).status_code == 200

    def test_only_super_admin_manages_admins(self, client, create_admin, admin_headers):
        payload = {"email": "baru@rapatin.id", "password": "rahasia456"}
        assert client.post("/api/v1/admin/admin-users", json=payload, headers=admin_headers).status_code == 403

        super_headers = create_admin(email="root@rapatin.id", role=AdminRole.SUPER_ADMIN)
        response = client.post("/api/v1/admin/admin-users", json=payload, headers=super_headers)
        assert response.status_code == 200
        assert response.json()["role"] == "content_manager"

        admins = client.get("/api/v1/admin/admin-users", headers=super_headers).json()
        assert len(admins) == 3


class TestBlogManagement:

    def test_create_requires_title_and_content(self, client, admin_headers):
        response = create_post(client, admin_headers, title="")
        assert response.status_code == 400
        assert response.json()["detail"] == "Judul dan konten harus diisi"

        response = create_post(client, admin_headers, content="")
        assert response.status_code == 400

        assert client.get("/api/v1/admin/blogs", headers=admin_headers).json()["total"] == 0

    def test_create_derives_slug_and_seo_title(self, client, admin_headers):
        response = create_post(client, admin_headers, title="Rapat Online: Panduan Lengkap!")
        assert response.status_code == 200
        post = response.json()
        assert post["slug"] == "rapat-online-panduan-lengkap"
        assert post["seo_title"] == "Rapat Online: Panduan Lengkap!"
        assert post["author"] == "Admin"
        assert post["status"] == "draft"

    def test_duplicate_slug(self, client, admin_headers):
        assert create_post(client, admin_headers).status_code == 200
        response = create_post(client, admin_headers)
        assert response.status_code == 400
        assert response.json()["detail"] == "Slug sudah digunakan artikel lain"

    def test_publish_lifecycle(self, client, admin_headers):
        post = create_post(client, admin_headers).json()
        slug = post["slug"]

        assert client.get(f"/blog/{slug}").status_code == 404

        published = client.put(f"/api/v1/admin/blogs/{post['id']}/publish", headers=admin_headers).json()
        assert published["status"] == "published"
        assert published["published_at"]

        public = client.get(f"/blog/{slug}")
        assert public.status_code == 200
        assert public.json()["content"] == "<p>Isi artikel</p>"
        assert public.json()["seo"]["title"] == "Cara Rapat Efektif"

        client.put(f"/api/v1/admin/blogs/{post['id']}/unpublish", headers=admin_headers)
        assert client.get(f"/blog/{slug}").status_code == 404

    def test_update(self, client, admin_headers):
        post = create_post(client, admin_headers).json()
        response = client.put(f"/api/v1/admin/blogs/{post['id']}", headers=admin_headers, json={
            "title": "Judul Baru",
            "slug": post["slug"],
            "content": "Isi baru",
            "status": "scheduled",
            "published_at": "2030-01-15T09:30",
        })
        assert response.status_code == 200
        updated = response.json()
        assert updated["title"] == "Judul Baru"
        assert updated["slug"] == post["slug"]
        assert updated["status"] == "scheduled"
        assert updated["published_at"].startswith("2030-01-15T09:30")

    def test_delete_removes_from_list(self, client, admin_headers):
        first = create_post(client, admin_headers, title="Pertama").json()
        second = create_post(client, admin_headers, title="Kedua").json()

        response = client.delete(f"/api/v1/admin/blogs/{first['id']}", headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["message"] == "Artikel berhasil dihapus"

        listing = client.get("/api/v1/admin/blogs", headers=admin_headers).json()
        assert [b["id"] for b in listing["blogs"]] == [second["id"]]
        assert client.delete(f"/api/v1/admin/blogs/{first['id']}", headers=admin_headers).status_code == 404

    def test_list_filters_by_status(self, client, admin_headers):
        create_post(client, admin_headers, title="Draft")
        create_post(client, admin_headers, title="Live", status="published")

        listing = client.get("/api/v1/admin/blogs?status=published", headers=admin_headers).json()
        assert listing["total"] == 1
        assert listing["blogs"][0]["title"] == "Live"

    def test_categories(self, client, admin_headers):
        client.post("/api/v1/admin/blog-categories", json={"name": "Tips Rapat"}, headers=admin_headers)
        categories = client.get("/api/v1/admin/blog-categories", headers=admin_headers).json()
        assert [c["name"] for c in categories] == ["Tips Rapat"]

        post = create_post(client, admin_headers).json()
        assert post["category"] == "Tips Rapat"

    def test_dashboard_stats(self, client, admin_headers):
        create_post(client, admin_headers, title="Draft")
        create_post(client, admin_headers, title="Live", status="published")
        client.post("/api/v1/admin/faq", json={"question": "Q?", "answer": "A."}, headers=admin_headers)

        stats = client.get("/api/v1/admin/dashboard/stats", headers=admin_headers).json()
        assert stats["totalBlogs"] == 2
        assert stats["publishedBlogs"] == 1
        assert stats["draftBlogs"] == 1
        assert stats["totalFaqs"] == 1
        assert len(stats["recentPosts"]) == 2


class TestContentManagement:

    def test_faq_crud(self, client, admin_headers):
        created = client.post("/api/v1/admin/faq", headers=admin_headers, json={
            "question": "Apakah ada biaya langganan?",
            "answer": "Tidak, bayar sesuai pakai.",
        }).json()

        updated = client.put(f"/api/v1/admin/faq/{created['id']}", headers=admin_headers, json={
            "question": "Apakah ada biaya bulanan?",
            "answer": "Tidak ada.",
        }).json()
        assert updated["question"] == "Apakah ada biaya bulanan?"

        faqs = client.get("/faq").json()["faqs"]
        assert faqs == [{"question": "Apakah ada biaya bulanan?", "answer": "Tidak ada."}]

        client.delete(f"/api/v1/admin/faq/{created['id']}", headers=admin_headers)
        assert client.get("/api/v1/admin/faq", headers=admin_headers).json() == []

    def test_faq_requires_fields(self, client, admin_headers):
        response = client.post("/api/v1/admin/faq", headers=admin_headers, json={"question": "", "answer": "x"})
        assert response.status_code == 422

    def test_testimonial_rating_range(self, client, admin_headers):
        payload = {"name": "Sari", "quote": "Mantap", "rating": 6}
        assert client.post("/api/v1/admin/testimonials", headers=admin_headers, json=payload).status_code == 422

        payload["rating"] = 4
        created = client.post("/api/v1/admin/testimonials", headers=admin_headers, json=payload).json()
        assert created["rating"] == 4
        assert client.get("/").json()["testimonials"][0]["name"] == "Sari"

    def test_inactive_brand_logo_hidden(self, client, admin_headers):
        client.post("/api/v1/admin/brand-logos", headers=admin_headers, json={
            "name": "Aktif", "logo_url": "https://cdn.test/a.png", "sort_order": 2,
        })
        client.post("/api/v1/admin/brand-logos", headers=admin_headers, json={
            "name": "Nonaktif", "logo_url": "https://cdn.test/b.png", "is_active": False,
        })

        assert len(client.get("/api/v1/admin/brand-logos", headers=admin_headers).json()) == 2
        logos = client.get("/").json()["brand_logos"]
        assert [logo["name"] for logo in logos] == ["Aktif"]

    def test_page_content(self, client, admin_headers):
        assert client.get("/api/v1/admin/pages/about", headers=admin_headers).status_code == 404

        response = client.put("/api/v1/admin/pages/contact", headers=admin_headers, json={
            "title": "Hubungi Kami",
            "content": "Kami siap membantu.",
            "extra": {"email": "cs@rapatin.id"},
        })
        assert response.status_code == 200

        page = client.get("/kontak").json()
        assert page["title"] == "Hubungi Kami"
        assert page["extra"]["email"] == "cs@rapatin.id"
        assert "address" in page["extra"]

    def test_unknown_page_key(self, client, admin_headers):
        assert client.get("/api/v1/admin/pages/harga", headers=admin_headers).status_code == 422

    def test_url_group_update(self, client, admin_headers):
        client.post("/api/v1/admin/urls", headers=admin_headers, json={
            "id": "2", "name": "CTA", "items": [{"label": "Daftar", "url": "https://rapatin.id/register"}],
        })
        response = client.put("/api/v1/admin/urls/2", headers=admin_headers, json={
            "items": [{"label": "Daftar", "url": "https://rapatin.id/promo"}],
        })
        assert response.status_code == 200
        assert client.get("/").json()["urls"]["cta"]["register_button"] == "https://rapatin.id/promo"


class TestUpload:

    def test_upload_blog_image(self, client, admin_headers, monkeypatch):
        uploads = []

        def fake_upload(file_content, file_name, kind, content_type="image/jpeg"):
            uploads.append((file_name, kind, content_type))
            return "blog-covers/abc.png"

        monkeypatch.setattr(s3_service, "upload_file", fake_upload)
        response = client.post(
            "/api/v1/upload/blog-image",
            headers=admin_headers,
            files={"file": ("cover.png", b"\x89PNG", "image/png")},
        )
        assert response.status_code == 200
        assert response.json()["url"].endswith("/blog-covers/abc.png")
        assert uploads == [("cover.png", "blog", "image/png")]

    def test_upload_rejects_non_image(self, client, admin_headers):
        response = client.post(
            "/api/v1/upload/brand-logo",
            headers=admin_headers,
            files={"file": ("logo.txt", b"hello", "text/plain")},
        )
        assert response.status_code == 400

    def test_failed_upload(self, client, admin_headers, monkeypatch):
        monkeypatch.setattr(s3_service, "upload_file", lambda **kwargs: None)
        response = client.post(
            "/api/v1/upload/testimonial-avatar",
            headers=admin_headers,
            files={"file": ("me.jpg", b"\xff\xd8", "image/jpeg")},
        )
        assert response.status_code == 500

    def test_delete_image(self, client, admin_headers, monkeypatch):
        deleted = []
        monkeypatch.setattr(s3_service, "delete_file", lambda key: deleted.append(key) or True)
        response = client.delete("/api/v1/upload/image/brand-logos/abc.png", headers=admin_headers)
        assert response.status_code == 200
        assert deleted == ["brand-logos/abc.png"]

    @pytest.mark.parametrize("path", ["backups/db.sql", "abc.png", "blog-covers/", "brand-logos/a/b.png"])
    def test_delete_image_outside_upload_folders(self, client, admin_headers, monkeypatch, path):
        deleted = []
        monkeypatch.setattr(s3_service, "delete_file", lambda key: deleted.append(key) or True)
        response = client.delete(f"/api/v1/upload/image/{path}", headers=admin_headers)
        assert response.status_code == 400
        assert deleted == []
