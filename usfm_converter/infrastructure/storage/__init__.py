from usfm_converter.infrastructure.storage.credential_store import EnvCredentialStore
from usfm_converter.infrastructure.storage.local_files import LocalFileDownloader, PlainTextExtractor

__all__ = ["EnvCredentialStore", "LocalFileDownloader", "PlainTextExtractor"]
