"""
Object storage for post media.

Objects go to MinIO; when MinIO is down and the local fallback is enabled
they are written under ``MEDIA_LOCAL_ROOT`` with a ``local/`` object-name
prefix. Either way bytes are only ever served through the gated media
route, never from a public static folder.
"""
import logging
import os
import uuid
from threading import Lock

import urllib3
from flask import current_app
from minio import Minio
from minio.error import S3Error

from creatorhub.errors import MediaStorageError, NotFoundError

logger = logging.getLogger(__name__)

LOCAL_PREFIX = "local/"

_minio_client = None
_minio_signature = None
_minio_lock = Lock()


def _config_signature():
    config = current_app.config
    return (
        config["MINIO_ENDPOINT"],
        config["MINIO_ACCESS_KEY"],
        config["MINIO_SECRET_KEY"],
        config["MINIO_SECURE"],
        config["MINIO_CONNECT_TIMEOUT"],
        config["MINIO_READ_TIMEOUT"],
        config.get("MINIO_HTTP_POOL_MAXSIZE", 32),
    )


def get_minio_client():
    global _minio_client, _minio_signature

    signature = _config_signature()
    with _minio_lock:
        if _minio_client is not None and _minio_signature == signature:
            return _minio_client

        endpoint, access_key, secret_key, secure, connect_timeout, read_timeout, pool_size = signature
        http_client = urllib3.PoolManager(
            timeout=urllib3.Timeout(connect=connect_timeout, read=read_timeout),
            retries=False,
            maxsize=pool_size,
        )
        _minio_client = Minio(
            endpoint,
            access_key=access_key,
            secret_key=secret_key,
            secure=secure,
            http_client=http_client,
        )
        _minio_signature = signature
        return _minio_client


def _local_root() -> str:
    root = current_app.config.get("MEDIA_LOCAL_ROOT") or os.path.join(
        current_app.instance_path, "media"
    )
    return os.path.abspath(root)


def _local_path(object_name: str) -> str:
    root = _local_root()
    path = os.path.abspath(os.path.join(root, object_name[len(LOCAL_PREFIX):]))
    if os.path.commonpath([root, path]) != root:
        raise NotFoundError("Media not found")
    return path


def _stream_and_length(file_storage):
    stream = getattr(file_storage, "stream", file_storage)
    try:
        stream.seek(0, 2)
        length = stream.tell()
        stream.seek(0)
        return stream, length
    except (AttributeError, OSError):
        return stream, -1


class MediaWriter:
    """Writes the files of one upload, switching to local disk at most once."""

    def __init__(self):
        self.bucket = current_app.config["MINIO_BUCKET"]
        self.fallback_enabled = bool(current_app.config.get("MEDIA_LOCAL_FALLBACK_ENABLED", True))
        self.use_local = False
        self._minio = None

        try:
            self._minio = get_minio_client()
            if not self._minio.bucket_exists(self.bucket):
                self._minio.make_bucket(self.bucket)
        except Exception as e:
            self._switch_to_local(e)

    def _switch_to_local(self, error):
        if not self.fallback_enabled:
            raise MediaStorageError("Media storage is unavailable") from error
        if not self.use_local:
            logger.warning("Object storage unavailable, using local media fallback: %s", error)
        self.use_local = True

    def write(self, file_storage, key: str, mime_type: str) -> str:
        if not self.use_local:
            stream, length = _stream_and_length(file_storage)
            upload_kwargs = {
                "bucket_name": self.bucket,
                "object_name": key,
                "data": stream,
                "length": length,
                "content_type": mime_type,
            }
            if length == -1:
                upload_kwargs["part_size"] = 10 * 1024 * 1024
            try:
                self._minio.put_object(**upload_kwargs)
                return key
            except Exception as e:
                self._switch_to_local(e)

        object_name = LOCAL_PREFIX + key
        path = _local_path(object_name)
        try:
            os.makedirs(os.path.dirname(path), exist_ok=True)
            stream = getattr(file_storage, "stream", file_storage)
            stream.seek(0)
            file_storage.save(path)
        except OSError as e:
            raise MediaStorageError("Media storage is unavailable") from e
        return object_name


def build_object_key(post_id: int, extension: str, kind: str = "media") -> str:
    return f"posts/{post_id}/{kind}/{uuid.uuid4()}.{extension}"


def build_profile_image_key(user_id: int, extension: str) -> str:
    return f"profiles/{user_id}/{uuid.uuid4()}.{extension}"


class StoredObject:
    """Metadata plus a lazy chunk iterator for one stored object."""

    def __init__(self, content_type, size, etag, last_modified, opener):
        self.content_type = content_type or "application/octet-stream"
        self.size = size
        self.etag = etag
        self.last_modified = last_modified
        self._opener = opener

    def iter_chunks(self, chunk_size: int):
        return self._opener(chunk_size)


def _is_not_found(error: S3Error) -> bool:
    return error.code in {"NoSuchKey", "NoSuchBucket", "NoSuchObject"}


def open_object(object_name: str, fallback_content_type: str | None = None) -> StoredObject:
    if object_name.startswith(LOCAL_PREFIX):
        path = _local_path(object_name)
        if not os.path.isfile(path):
            raise NotFoundError("Media not found")
        stat = os.stat(path)

        def _read_local(chunk_size):
            with open(path, "rb") as handle:
                while True:
                    chunk = handle.read(chunk_size)
                    if not chunk:
                        break
                    yield chunk

        return StoredObject(
            content_type=fallback_content_type,
            size=stat.st_size,
            etag=f"{int(stat.st_mtime)}-{stat.st_size}",
            last_modified=None,
            opener=_read_local,
        )

    bucket = current_app.config["MINIO_BUCKET"]
    minio = get_minio_client()
    try:
        stat = minio.stat_object(bucket_name=bucket, object_name=object_name)
    except S3Error as e:
        if _is_not_found(e):
            raise NotFoundError("Media not found") from e
        raise MediaStorageError("Media unavailable") from e
    except Exception as e:
        raise MediaStorageError("Media unavailable") from e

    def _read_minio(chunk_size):
        try:
            response = minio.get_object(bucket_name=bucket, object_name=object_name)
        except S3Error as e:
            logger.warning("Media object %s vanished between stat and read: %s", object_name, e)
            return
        try:
            for chunk in response.stream(chunk_size):
                yield chunk
        finally:
            response.close()
            response.release_conn()

    return StoredObject(
        content_type=getattr(stat, "content_type", None) or fallback_content_type,
        size=getattr(stat, "size", None),
        etag=getattr(stat, "etag", None),
        last_modified=getattr(stat, "last_modified", None),
        opener=_read_minio,
    )


def remove_objects(object_names) -> None:
    """Failures are logged, never raised."""
    bucket = current_app.config["MINIO_BUCKET"]
    for object_name in object_names:
        try:
            if object_name.startswith(LOCAL_PREFIX):
                path = _local_path(object_name)
                if os.path.isfile(path):
                    os.remove(path)
            else:
                get_minio_client().remove_object(bucket, object_name)
        except Exception as e:
            logger.warning("Could not remove media object %s: %s", object_name, e)
