# src/nodehub/adapters/nodes/http_client.py
from __future__ import annotations
import asyncio
import logging
from typing import Any, Mapping, Optional

import httpx

from nodehub.config import const
from nodehub.ports import NodeClient, ProbeResult

_log = logging.getLogger("nodehub.probe")


def _docker_info(body: Mapping[str, Any]) -> Any:
    # старые демоны отдают сведения о docker под ключом "docker"
    if "dockerInfo" in body:
        return body["dockerInfo"]
    return body.get("docker")


class HttpNodeClient(NodeClient):
    """
    Один probe = один GET на http://{address}:{port}/ с Basic-auth (username, api_key).

    Недоступность ноды: штатная ситуация: сеть, таймаут, не-2xx и нечитаемое тело
    превращаются в ProbeResult(online=False). Ошибки конфигурации (например, httpx.InvalidURL)
    не перехватываются.
    """

    def __init__(
        self,
        *,
        timeout: float = const.PROBE_TIMEOUT_SEC,
        username: str = const.PROBE_USERNAME,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.timeout = timeout
        self.username = username
        self._transport = transport

    async def probe(self, address: str, port: int, api_key: str) -> ProbeResult:
        url = f"http://{address}:{port}/"
        try:
            # общий дедлайн на probe: таймауты httpx ограничивают только отдельные фазы
            return await asyncio.wait_for(self._fetch(url, api_key), timeout=self.timeout)
        except asyncio.TimeoutError:
            return self._offline(url, "timeout")
        except httpx.HTTPError as e:
            return self._offline(url, f"{type(e).__name__}: {e}")
        except ValueError:
            # JSONDecodeError и UnicodeDecodeError: тело не читается как JSON
            return self._offline(url, "body is not valid JSON")

    async def _fetch(self, url: str, api_key: str) -> ProbeResult:
        # ноды опрашиваются напрямую, прокси из окружения не используются
        async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout, trust_env=False) as client:
            r = await client.get(
                url,
                auth=(self.username, api_key),
                headers={"Content-Type": "application/json"},
            )
        if not r.is_success:
            return self._offline(url, f"HTTP {r.status_code}")
        body = r.json()
        if not isinstance(body, dict):
            return self._offline(url, "body is not a JSON object")
        return ProbeResult(
            online=True,
            version_family=body.get("versionFamily"),
            version_release=body.get("versionRelease"),
            remote=body.get("remote"),
            docker_info=_docker_info(body),
        )

    @staticmethod
    def _offline(url: str, reason: str) -> ProbeResult:
        _log.debug("probe.offline", extra={"extra": {"url": url, "reason": reason}})
        return ProbeResult(online=False, reason=reason)
