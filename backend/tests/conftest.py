import pytest
from fastapi.testclient import TestClient

from wordgamedb.config import Settings
from wordgamedb.main import create_app


def make_settings(tmp_path, **overrides) -> Settings:
    values = {
        "database_url": f"sqlite:///{tmp_path / 'test.db'}",
        "enable_destructive_endpoints": True,
        "seed_sample_words": False,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings(tmp_path):
    return make_settings(tmp_path)


@pytest.fixture
def app(settings):
    app = create_app(settings)
    yield app
    app.state.database.dispose()


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def make_word(client):
    def _make(word, category="fruit", num_letters=None, num_syllables=2, hint="a hint"):
        payload = {
            "word": word,
            "category": category,
            "numLetters": num_letters if num_letters is not None else len(word),
            "numSyllables": num_syllables,
            "hint": hint,
        }
        resp = client.post("/api/v2/words", json=payload)
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _make
