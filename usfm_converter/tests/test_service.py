import tempfile
import zipfile
from pathlib import Path

from usfm_converter.api import service
from usfm_converter.domain.models import CompletionSuccess
from usfm_converter.infrastructure.storage import EnvCredentialStore


VALID_USFM = "\\id JHN\n\\h John\n\\mt John\n\\p\n\\v 1 In the beginning"


class FakeClient:
    name = "fake"

    def __init__(self):
        self.calls = []

    def complete(self, messages, api_key, model=None):
        self.calls.append({"text": messages[1].content, "api_key": api_key})
        return CompletionSuccess(usfm_text=VALID_USFM)


def make_settings(root: Path, api_key=None):
    class DummySettings:
        openrouter_api_key = api_key
        default_model = "usfm-convert"
        credential_env_file = str(root / ".env")
        output_dir = str(root / "out")
        output_filename = "converted.usfm"

    return DummySettings()


def patch_service(monkeypatch, root: Path, api_key=None):
    client = FakeClient()
    monkeypatch.setattr(service, "settings", make_settings(root, api_key))
    monkeypatch.setattr(service, "create_provider", lambda *a, **kw: client)
    monkeypatch.setattr(service, "_orchestrator", None)
    monkeypatch.setattr(service, "_logged_out", False)
    return client


def test_convert_notes_uses_stored_credential(monkeypatch):
    with tempfile.TemporaryDirectory() as d:
        root = Path(d)
        client = patch_service(monkeypatch, root)
        service.save_api_key("sk-or-stored-key-123")
        res = service.convert_notes("Genesis 1:1 In the beginning")
        assert res == {"success": True, "usfm": VALID_USFM}
        assert client.calls[0]["api_key"] == "sk-or-stored-key-123"


def test_convert_notes_explicit_key(monkeypatch):
    with tempfile.TemporaryDirectory() as d:
        client = patch_service(monkeypatch, Path(d), api_key="sk-or-settings-key")
        service.convert_notes("notes", api_key="sk-or-explicit-key")
        assert client.calls[0]["api_key"] == "sk-or-explicit-key"


def test_convert_notes_empty_input(monkeypatch):
    with tempfile.TemporaryDirectory() as d:
        client = patch_service(monkeypatch, Path(d), api_key="sk-or-settings-key")
        res = service.convert_notes("   ")
        assert res["success"] is False
        assert res["error"] == "Input text cannot be empty"
        assert client.calls == []


def test_convert_document_reads_text_file(monkeypatch):
    with tempfile.TemporaryDirectory() as d:
        root = Path(d)
        client = patch_service(monkeypatch, root, api_key="sk-or-settings-key")
        doc = root / "notes.txt"
        doc.write_text("John 1:1 In the beginning was the Word", encoding="utf-8")
        res = service.convert_document(doc)
        assert res["success"] is True
        assert client.calls[0]["text"] == "John 1:1 In the beginning was the Word"


def test_convert_document_failure_skips_conversion(monkeypatch):
    with tempfile.TemporaryDirectory() as d:
        root = Path(d)
        client = patch_service(monkeypatch, root, api_key="sk-or-settings-key")
        doc = root / "notes.docx"
        doc.write_bytes(b"PK\x03\x04")
        res = service.convert_document(doc)
        assert res == {"success": False, "error": "Failed to read document", "code": "DOCUMENT_ERROR"}
        assert client.calls == []


def test_convert_document_with_injected_extractor(monkeypatch):
    class UpperExtractor:
        def extract(self, data, filename=""):
            return data.decode("utf-8").upper()

    with tempfile.TemporaryDirectory() as d:
        root = Path(d)
        client = patch_service(monkeypatch, root, api_key="sk-or-settings-key")
        doc = root / "notes.docx"
        doc.write_bytes(b"john 3:16")
        service.convert_document(doc, extractor=UpperExtractor())
        assert client.calls[0]["text"] == "JOHN 3:16"


def test_save_output_writes_default_file(monkeypatch):
    with tempfile.TemporaryDirectory() as d:
        root = Path(d)
        patch_service(monkeypatch, root)
        target = service.save_output(VALID_USFM)
        assert target == (root / "out" / "converted.usfm").resolve()
        assert target.read_text(encoding="utf-8") == VALID_USFM


def test_copy_output():
    class Clipboard:
        def __init__(self):
            self.text = None

        def write(self, text):
            self.text = text

    class BrokenClipboard:
        def write(self, text):
            raise OSError("no clipboard")

    clip = Clipboard()
    assert service.copy_output(VALID_USFM, clip) is True
    assert clip.text == VALID_USFM
    assert service.copy_output(VALID_USFM, BrokenClipboard()) is False
    assert service.copy_output("", clip) is False


def test_clear_api_key(monkeypatch):
    with tempfile.TemporaryDirectory() as d:
        root = Path(d)
        patch_service(monkeypatch, root)
        service.save_api_key("sk-or-stored-key-123")
        service.clear_api_key()
        assert EnvCredentialStore(root / ".env").load() is None


def test_convert_document_extractor_error_of_any_type(monkeypatch):
    class ZipExtractor:
        def extract(self, data, filename=""):
            raise zipfile.BadZipFile("File is not a zip file")

    with tempfile.TemporaryDirectory() as d:
        root = Path(d)
        client = patch_service(monkeypatch, root, api_key="sk-or-settings-key")
        doc = root / "notes.docx"
        doc.write_bytes(b"not a zip")
        res = service.convert_document(doc, extractor=ZipExtractor())
        assert res == {"success": False, "error": "Failed to read document", "code": "DOCUMENT_ERROR"}
        assert client.calls == []


def test_stored_key_overrides_settings_key_and_logout(monkeypatch):
    with tempfile.TemporaryDirectory() as d:
        root = Path(d)
        client = patch_service(monkeypatch, root, api_key="sk-or-from-settings-000")

        service.convert_notes("John 1:1")
        assert client.calls[-1]["api_key"] == "sk-or-from-settings-000"

        service.save_api_key("sk-or-new-key-456")
        service.convert_notes("John 1:2")
        assert client.calls[-1]["api_key"] == "sk-or-new-key-456"

        service.clear_api_key()
        service.convert_notes("John 1:3")
        assert client.calls[-1]["api_key"] is None

        service.save_api_key("sk-or-again-key-789")
        service.convert_notes("John 1:4")
        assert client.calls[-1]["api_key"] == "sk-or-again-key-789"
