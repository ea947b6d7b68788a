import pytest

from envie.config import get_settings


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def env_dir(tmp_path, monkeypatch):
    """Working directory holding a .env file, as load() expects."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def write_dotenv(env_dir):
    def _write(content: str):
        path = env_dir / ".env"
        path.write_text(content, encoding="utf-8")
        return path

    return _write
