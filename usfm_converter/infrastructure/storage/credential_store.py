"""基于 .env 文件的 API 密钥存储。"""

from __future__ import annotations

from collections import OrderedDict
from pathlib import Path
from typing import MutableMapping, Optional, Union


API_KEY_VAR = "OPENROUTER_API_KEY"


class EnvCredentialStore:
    """把 OpenRouter API 密钥读写到 .env 文件中，其他键值原样保留（顺序不变）。"""

    def __init__(self, env_file: Union[str, Path] = ".env", key_name: str = API_KEY_VAR):
        self.env_file = Path(env_file).expanduser()
        self.key_name = key_name

    def load(self) -> Optional[str]:
        value = self._read().get(self.key_name, "").strip().strip('"').strip("'")
        return value or None

    def save(self, api_key: str) -> None:
        api_key = (api_key or "").strip()
        if not api_key:
            raise ValueError("API key must not be empty")
        pairs = self._read()
        pairs[self.key_name] = api_key
        self._write(pairs)

    def clear(self) -> None:
        pairs = self._read()
        if pairs.pop(self.key_name, None) is not None:
            self._write(pairs)

    def _read(self) -> MutableMapping[str, str]:
        pairs: MutableMapping[str, str] = OrderedDict()
        if not self.env_file.exists():
            return pairs
        for raw_line in self.env_file.read_text(encoding="utf-8").splitlines():
            line = raw_line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, value = line.split("=", 1)
            pairs[key.strip()] = value.strip()
        return pairs

    def _write(self, data: MutableMapping[str, str]) -> None:
        self.env_file.parent.mkdir(parents=True, exist_ok=True)
        lines = [f"{key}={value}" for key, value in data.items() if key]
        self.env_file.write_text("\n".join(lines) + "\n" if lines else "", encoding="utf-8")
