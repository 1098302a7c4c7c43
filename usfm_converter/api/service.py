"""对外 API 服务模块。

提供简化的函数接口供界面层调用：转换、上传转换、下载、复制以及密钥管理。
上传/下载/剪贴板/凭证都通过协作者协议注入，转换核心本身不接触这些全局能力。
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union

from usfm_converter.config.settings import settings
from usfm_converter.domain.collaborators import ClipboardWriter, CredentialStore, FileDownloader, TextExtractor
from usfm_converter.flows import ConversionOrchestrator
from usfm_converter.infrastructure.logging.logger import logger
from usfm_converter.infrastructure.storage import EnvCredentialStore, LocalFileDownloader, PlainTextExtractor
from usfm_converter.providers import create_provider


_orchestrator: Optional[ConversionOrchestrator] = None
# clear_api_key() 之后不再回退到配置中的密钥，直到再次 save_api_key()
_logged_out = False


def get_credential_store() -> CredentialStore:
    return EnvCredentialStore(settings.credential_env_file)


def _resolve_api_key() -> Optional[str]:
    """凭证存储优先，存储为空时才使用配置中的密钥；登出后两者都不使用。"""
    if _logged_out:
        return None
    return get_credential_store().load() or settings.openrouter_api_key


def get_default_orchestrator() -> ConversionOrchestrator:
    """获取默认的转换编排器实例（单例），密钥取自凭证存储或配置。"""
    global _orchestrator
    if _orchestrator is None:
        _orchestrator = ConversionOrchestrator(
            client=create_provider(),
            api_key=_resolve_api_key(),
            model=settings.default_model,
        )
    return _orchestrator


def _orchestrator_for(api_key: Optional[str]) -> ConversionOrchestrator:
    if api_key is None:
        return get_default_orchestrator()
    return ConversionOrchestrator(client=create_provider(), api_key=api_key, model=settings.default_model)


def convert_notes(text: str, api_key: Optional[str] = None) -> Dict[str, Any]:
    """把笔记文本转换为 USFM。

    Args:
        text: 原始笔记文本
        api_key: 指定 API 密钥（可选，不提供则使用默认编排器）

    Returns:
        {"success": True, "usfm": ...} 或 {"success": False, "error": ..., "code": ...}
    """
    result = _orchestrator_for(api_key).convert(text)
    return result.to_dict()


def convert_document(
    path: Union[str, Path],
    extractor: Optional[TextExtractor] = None,
    api_key: Optional[str] = None,
) -> Dict[str, Any]:
    """读取上传的文档，提取文本后转换。文档读取失败时不发起转换。"""
    doc = Path(path)
    extractor = extractor or PlainTextExtractor()
    try:
        text = extractor.extract(doc.read_bytes(), doc.name)
    except Exception as e:  # noqa: BLE001 - 提取器由界面层注入，任何读取失败都只影响本次上传
        logger.error(f"Document extraction failed: {e}", extra={"extra": {"path": str(doc)}})
        return {"success": False, "error": "Failed to read document", "code": "DOCUMENT_ERROR"}
    return convert_notes(text, api_key=api_key)


def save_output(usfm: str, downloader: Optional[FileDownloader] = None, filename: Optional[str] = None) -> Path:
    """把转换结果保存为文件（默认 converted.usfm），返回写入路径。"""
    if not usfm:
        raise ValueError("Nothing to save: output is empty")
    downloader = downloader or LocalFileDownloader(Path(settings.output_dir))
    target = downloader.download(usfm, filename or settings.output_filename)
    logger.info("output.saved", extra={"extra": {"path": str(target)}})
    return target


def copy_output(usfm: str, clipboard: ClipboardWriter) -> bool:
    """复制转换结果到剪贴板，失败时记录日志并返回 False。"""
    if not usfm:
        return False
    try:
        clipboard.write(usfm)
    except Exception as e:  # noqa: BLE001 - 剪贴板实现由界面层提供，失败只影响本次复制
        logger.error(f"Copy failed: {e}")
        return False
    return True


def save_api_key(api_key: str, store: Optional[CredentialStore] = None) -> None:
    """保存 API 密钥，并让默认编排器在下次使用时重新加载。"""
    global _orchestrator, _logged_out
    (store or get_credential_store()).save(api_key)
    _logged_out = False
    _orchestrator = None


def clear_api_key(store: Optional[CredentialStore] = None) -> None:
    """清除已保存的 API 密钥（相当于界面上的“登出”）。

    登出后默认编排器不带密钥，即使启动时配置里读到过密钥，
    转换也会以 MISSING_API_KEY 失败。
    """
    global _orchestrator, _logged_out
    (store or get_credential_store()).clear()
    _logged_out = True
    _orchestrator = None
