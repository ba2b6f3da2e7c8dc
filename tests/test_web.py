from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from lsysparse.web.app import create_app

PLANT = "generations:4\nangle:25.7\nscale:1\naxiom:F\nF -> F[+F]F[-F]F\n"


@pytest.fixture()
def client() -> TestClient:
    return TestClient(create_app())


class TestWebApp:
    def test_parse(self, client: TestClient) -> None:
        response = client.post("/api/parse", content=PLANT)
        assert response.status_code == 200
        payload = response.json()
        assert payload["angle"] == 25.7
        assert payload["productions"][0]["predecessor"] == "F"
        assert "".join(payload["productions"][0]["alternatives"][0]["successor"]) == "F[+F]F[-F]F"

    def test_syntax_error(self, client: TestClient) -> None:
        response = client.post("/api/parse", content=PLANT.replace("scale:1", "scale:big"))
        assert response.status_code == 422
        payload = response.json()
        assert payload["rule"] == "real"
        assert payload["context"] == "big"
        assert payload["line"] == 3
        assert payload["column"] == 7

    def test_invalid_encoding(self, client: TestClient) -> None:
        response = client.post("/api/parse", content=b"\xff\xfe")
        assert response.status_code == 400

    def test_aliases(self, tmp_path: Path) -> None:
        config = tmp_path / "config.toml"
        config.write_text('[parser.aliases]\nG = "move_forward"\n', encoding="utf-8")
        client = TestClient(create_app(config))
        assert client.get("/api/aliases").json() == {
            "F": "MoveForward",
            "G": "MoveForward",
            "f": "JumpForward",
        }
        response = client.post("/api/parse", content=PLANT.replace("axiom:F", "axiom:G"))
        assert response.json()["axiom"] == ["F"]

    def test_overflowing_real(self, client: TestClient) -> None:
        response = client.post("/api/parse", content=PLANT.replace("angle:25.7", "angle:1e999"))
        assert response.status_code == 422
        assert response.json()["rule"] == "finite real"
