import io
import os
import shutil
import tempfile
import unittest
from unittest.mock import patch


class FakeMinioResponse:
    def __init__(self, data):
        self._data = data
        self.closed = False
        self.released = False

    def stream(self, chunk_size):
        for start in range(0, len(self._data), chunk_size):
            yield self._data[start:start + chunk_size]

    def close(self):
        self.closed = True

    def release_conn(self):
        self.released = True


class FakeStat:
    def __init__(self, data, content_type):
        self.size = len(data)
        self.content_type = content_type
        self.etag = f"etag-{len(data)}"
        self.last_modified = None


class FakeMinio:
    def __init__(self):
        self.objects = {}
        self.get_calls = 0

    def bucket_exists(self, bucket_name):
        return True

    def make_bucket(self, bucket_name):
        return None

    def put_object(self, bucket_name, object_name, data, length, content_type, **kwargs):
        self.objects[object_name] = (data.read(), content_type)

    def stat_object(self, bucket_name, object_name):
        data, content_type = self.objects[object_name]
        return FakeStat(data, content_type)

    def get_object(self, bucket_name, object_name):
        self.get_calls += 1
        return FakeMinioResponse(self.objects[object_name][0])

    def remove_object(self, bucket_name, object_name):
        self.objects.pop(object_name, None)


class FailingMinio:
    def bucket_exists(self, bucket_name):
        raise RuntimeError("storage down")


class ApiTestCase(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        db_fd, cls.db_path = tempfile.mkstemp(suffix=".db")
        os.close(db_fd)
        cls.media_root = tempfile.mkdtemp()

        from creatorhub import create_app
        from creatorhub.db import db
        from creatorhub.services import auth_service

        cls.app = create_app({
            "TESTING": True,
            "SQLALCHEMY_DATABASE_URI": f"sqlite:///{cls.db_path}",
            "JWT_SECRET_KEY": "test-secret-key-with-enough-length-for-hs256",
            "MEDIA_LOCAL_ROOT": cls.media_root,
            "LOG_LEVEL": "WARNING",
        })
        cls.client = cls.app.test_client()
        cls.db = db
        cls.auth_service = auth_service

    @classmethod
    def tearDownClass(cls):
        with cls.app.app_context():
            cls.db.session.remove()
            cls.db.engine.dispose()
        if os.path.exists(cls.db_path):
            os.remove(cls.db_path)
        shutil.rmtree(cls.media_root, ignore_errors=True)

    def setUp(self):
        with self.app.app_context():
            self.db.drop_all()
            self.db.create_all()
        self.fake_minio = FakeMinio()
        self.minio_patch = patch(
            "creatorhub.extensions.media_storage.get_minio_client",
            return_value=self.fake_minio,
        )
        self.minio_patch.start()
        self.addCleanup(self.minio_patch.stop)

    def _register(self, username, password="pass123", role="user"):
        with self.app.app_context():
            return self.auth_service.register(username, password, role=role).id

    def _auth_header(self, username, password="pass123"):
        with self.app.app_context():
            token = self.auth_service.login(username, password)["access_token"]
        return {"Authorization": f"Bearer {token}"}

    def _refresh_header(self, username, password="pass123"):
        with self.app.app_context():
            token = self.auth_service.login(username, password)["refresh_token"]
        return {"Authorization": f"Bearer {token}"}

    def _create_post(self, username, is_public=False, title="title", description="description",
                     media_count=0):
        headers = self._auth_header(username)
        if media_count:
            data = {
                "title": title,
                "description": description,
                "is_public": "true" if is_public else "false",
                "media": [
                    (io.BytesIO(f"image-{i}".encode()), f"img{i}.png", "image/png")
                    for i in range(media_count)
                ],
            }
            response = self.client.post(
                "/api/posts",
                data=data,
                headers=headers,
                content_type="multipart/form-data",
            )
        else:
            response = self.client.post(
                "/api/posts",
                json={"title": title, "description": description, "is_public": is_public},
                headers=headers,
            )
        self.assertEqual(response.status_code, 201, response.get_json())
        return response.get_json()["post_id"]

    def _subscribe(self, username, creator):
        response = self.client.post(
            "/api/subscriptions",
            json={"creator": creator},
            headers=self._auth_header(username),
        )
        self.assertIn(response.status_code, (200, 201), response.get_json())
        return response
