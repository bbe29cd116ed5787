import pytest
from pydantic import ValidationError

from ytmarks.core.config import Settings
from ytmarks.core.exceptions import CustomHTTPException, NotFoundError, PersistenceError
from ytmarks.core.exceptions import ValidationError as StoreValidationError
from ytmarks.db.collection import JsonFileCollection, StorageAreaCollection
from ytmarks.db.factory import build_store
from ytmarks.db.storage import DatabaseStorageArea, JsonFileStorageArea, MemoryStorageArea


class TestSettings:

    def test_defaults(self):
        config = Settings(_env_file=None)

        assert config.PORT == 3000
        assert config.STORAGE_BACKEND == "file"
        assert config.BACKEND_CORS_ORIGINS == ["*"]

    def test_cors_origins_from_comma_separated_string(self):
        config = Settings(_env_file=None, BACKEND_CORS_ORIGINS="http://a.test, http://b.test")
        assert config.BACKEND_CORS_ORIGINS == ["http://a.test", "http://b.test"]

    def test_storage_backend_is_checked(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, STORAGE_BACKEND="redis")

    def test_storage_backend_is_case_insensitive(self):
        assert Settings(_env_file=None, STORAGE_BACKEND="Memory").STORAGE_BACKEND == "memory"

    def test_postgres_url_gets_async_driver(self):
        config = Settings(_env_file=None, DATABASE_URL="postgresql://u:p@db/bookmarks")
        assert config.ASYNC_DATABASE_URL == "postgresql+asyncpg://u:p@db/bookmarks"


class TestBuildStore:

    def test_file_backend(self, tmp_path):
        config = Settings(
            _env_file=None,
            BOOKMARKS_FILE=tmp_path / "b.json",
            STORAGE_FILE=tmp_path / "s.json",
        )

        store = build_store(config)

        assert isinstance(store.backend, JsonFileCollection)
        assert isinstance(store.titles.area, JsonFileStorageArea)

    def test_memory_backend_shares_one_area(self):
        store = build_store(Settings(_env_file=None, STORAGE_BACKEND="memory"))

        assert isinstance(store.backend, StorageAreaCollection)
        assert isinstance(store.backend.area, MemoryStorageArea)
        assert store.titles.area is store.backend.area

    def test_database_backend(self):
        store = build_store(Settings(_env_file=None, STORAGE_BACKEND="database"))

        assert isinstance(store.backend.area, DatabaseStorageArea)
        assert store.backend.key == "bookmarks"
        assert store.titles.key == "videoTitles"


@pytest.mark.parametrize("error,status_code,error_code", [
    (StoreValidationError("missing"), 400, "VALIDATION_ERROR"),
    (NotFoundError("gone"), 404, "BOOKMARK_NOT_FOUND"),
    (PersistenceError("disk"), 500, "PERSISTENCE_ERROR"),
])
def test_store_errors_map_to_http(error, status_code, error_code):
    exc = CustomHTTPException.from_store_error(error)

    assert exc.status_code == status_code
    assert exc.error_code == error_code
    assert exc.detail == error.message
