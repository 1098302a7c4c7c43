import tempfile
from pathlib import Path

import pytest

from usfm_converter.infrastructure.storage import EnvCredentialStore, LocalFileDownloader, PlainTextExtractor


def test_credential_store_roundtrip_keeps_other_keys():
    with tempfile.TemporaryDirectory() as d:
        env = Path(d) / ".env"
        env.write_text("# comment\nLOG_DIR=logs\n", encoding="utf-8")
        store = EnvCredentialStore(env)
        assert store.load() is None
        store.save("  sk-or-abc-123  ")
        assert store.load() == "sk-or-abc-123"
        assert "LOG_DIR=logs" in env.read_text(encoding="utf-8")
        store.clear()
        assert store.load() is None
        assert "LOG_DIR=logs" in env.read_text(encoding="utf-8")


def test_credential_store_rejects_empty_key():
    with tempfile.TemporaryDirectory() as d:
        store = EnvCredentialStore(Path(d) / ".env")
        with pytest.raises(ValueError):
            store.save("   ")


def test_credential_store_strips_quotes():
    with tempfile.TemporaryDirectory() as d:
        env = Path(d) / ".env"
        env.write_text('OPENROUTER_API_KEY="sk-or-quoted-1"\n', encoding="utf-8")
        assert EnvCredentialStore(env).load() == "sk-or-quoted-1"


def test_plain_text_extractor():
    extractor = PlainTextExtractor()
    assert extractor.extract("\ufeffJohn 3:16".encode("utf-8"), "notes.txt") == "John 3:16"
    with pytest.raises(ValueError):
        extractor.extract(b"PK", "notes.docx")
    with pytest.raises(ValueError):
        extractor.extract(b"\xff\xfe\x00", "notes.txt")


def test_local_file_downloader_strips_directories():
    with tempfile.TemporaryDirectory() as d:
        downloader = LocalFileDownloader(Path(d) / "out")
        target = downloader.download("\\id JHN", "../../escape.usfm")
        assert target.parent == (Path(d) / "out").resolve()
        assert target.read_text(encoding="utf-8") == "\\id JHN"
