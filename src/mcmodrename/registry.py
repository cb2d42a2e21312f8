"""Modrinth 注册表客户端

查询模组的客户端/服务端支持情况和分类，结果按 modId 缓存。
"""

import logging
import threading

import requests
from pydantic import ValidationError

from mcmodrename import __version__
from mcmodrename.models import RegistryRecord

logger = logging.getLogger(__name__)

DEFAULT_API_ENDPOINT = "https://api.modrinth.com/v2"
DEFAULT_TIMEOUT = 10.0
USER_AGENT = f"mcmodrename/{__version__}"


class RegistryCache:
    """modId -> 注册表记录 的缓存

    缓存值为 None 表示已查询但未找到，与“未查询”不同。
    """

    def __init__(self):
        self._data: dict[str, RegistryRecord | None] = {}
        self._lock = threading.Lock()

    def has(self, mod_id: str) -> bool:
        with self._lock:
            return mod_id in self._data

    def get(self, mod_id: str) -> RegistryRecord | None:
        with self._lock:
            return self._data.get(mod_id)

    def set_if_absent(
        self, mod_id: str, record: RegistryRecord | None
    ) -> RegistryRecord | None:
        """写入缓存（每个 key 只写一次），返回缓存中的值"""
        with self._lock:
            return self._data.setdefault(mod_id, record)

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)


class RegistryClient:
    """Modrinth API 客户端"""

    def __init__(
        self,
        endpoint: str = DEFAULT_API_ENDPOINT,
        cache: RegistryCache | None = None,
        session: requests.Session | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        """初始化客户端

        Args:
            endpoint: API 基础地址（如 https://api.modrinth.com/v2）
            cache: 共享缓存，默认新建
            session: requests 会话，默认新建
            timeout: 单次请求超时时间（秒），不重试
        """
        self.endpoint = endpoint.rstrip("/")
        self.cache = cache if cache is not None else RegistryCache()
        self.session = session or requests.Session()
        self.session.headers.setdefault("User-Agent", USER_AGENT)
        self.timeout = timeout

    def project_url(self, mod_id: str) -> str:
        return f"{self.endpoint}/project/{mod_id}"

    def fetch(self, mod_id: str) -> RegistryRecord | None:
        """获取模组的注册表记录

        每个 modId 最多请求一次，失败结果同样缓存。

        Args:
            mod_id: modId（作为 Modrinth slug 使用）

        Returns:
            RegistryRecord，未找到或请求失败时返回 None
        """
        if self.cache.has(mod_id):
            return self.cache.get(mod_id)

        record = self._request(mod_id)
        return self.cache.set_if_absent(mod_id, record)

    def _request(self, mod_id: str) -> RegistryRecord | None:
        url = self.project_url(mod_id)
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            logger.debug(f"请求失败 ({url}): {e}")
            return None

        if not response.ok:
            logger.debug(f"注册表中未找到 {mod_id}: HTTP {response.status_code}")
            return None

        try:
            return RegistryRecord.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.debug(f"解析注册表响应失败 ({url}): {e}")
            return None

    def close(self) -> None:
        self.session.close()
