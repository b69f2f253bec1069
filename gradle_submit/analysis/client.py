"""Async client for the package analysis service."""

import asyncio
import json
import ssl
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

import aiohttp
import certifi
from aiohttp import ClientTimeout

from ..errors import AnalysisAPIError
from ..utils.logging import get_logger

DEFAULT_LABEL = "gradle-submit"


@dataclass
class AnalysisConfig:
    """Connection settings for the analysis service."""

    base_url: str
    token: Optional[str] = None
    timeout: float = 30.0
    verify_ssl: bool = True

    def __post_init__(self) -> None:
        """Validate configuration."""
        if not self.base_url:
            raise ValueError("Analysis service URL cannot be empty")
        if not self.base_url.startswith(("http://", "https://")):
            raise ValueError(f"Analysis service URL must be http(s): {self.base_url}")
        if self.timeout <= 0:
            raise ValueError("Timeout must be positive")
        self.base_url = self.base_url.rstrip("/")


class ProjectStatus(str, Enum):
    CREATED = "Created"
    EXISTS = "Exists"


@dataclass
class ProjectCreation:
    """Structured answer to a create-project request."""

    name: str
    id: str
    status: ProjectStatus

    @property
    def created(self) -> bool:
        return self.status is ProjectStatus.CREATED


class AnalysisClient:
    """Client for the analysis service's project and job endpoints.

    Project creation is idempotent from the caller's point of view: an
    existing project is reported with :attr:`ProjectStatus.EXISTS` and its id.
    Ids are cached by project name for the lifetime of the client.
    """

    PROJECTS_PATH = "/v0/data/projects"
    JOBS_PATH = "/v0/data/jobs"

    def __init__(self, config: AnalysisConfig, session: Optional[aiohttp.ClientSession] = None) -> None:
        """Initialize the analysis client.

        Args:
            config: Service URL, credentials and timeouts
            session: Optional aiohttp session for connection reuse
        """
        self.config = config
        self.logger = get_logger("AnalysisClient")
        self._session = session
        self._owns_session = session is None
        self._project_ids: Dict[str, str] = {}

        self._ssl_context = ssl.create_default_context(cafile=certifi.where())
        if not config.verify_ssl:
            self._ssl_context.check_hostname = False
            self._ssl_context.verify_mode = ssl.CERT_NONE

    async def __aenter__(self) -> "AnalysisClient":
        """Async context manager entry."""
        self._get_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()

    async def close(self) -> None:
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()

    async def create_project(self, name: str, group: Optional[str] = None) -> ProjectCreation:
        """Create a project, or look up the existing one of that name.

        Args:
            name: Project name
            group: Optional group the project belongs to

        Returns:
            Project id and whether it was created or already existed

        Raises:
            AnalysisAPIError: On transport errors or unexpected responses
        """
        payload: Dict[str, Any] = {"name": name}
        if group:
            payload["group_name"] = group

        status, data = await self._post(self.PROJECTS_PATH, payload)
        if status in (200, 201):
            project_status = ProjectStatus.CREATED
        elif status == 409:
            project_status = ProjectStatus.EXISTS
        else:
            raise AnalysisAPIError(
                f"Creating project '{name}' failed with HTTP {status}",
                status=status,
                body=json.dumps(data),
            )

        project_id = data.get("id")
        if not project_id:
            raise AnalysisAPIError(f"No id returned for project '{name}'", status=status, body=json.dumps(data))

        self._project_ids[name] = str(project_id)
        if project_status is ProjectStatus.CREATED:
            self.logger.info(f"Created project '{name}'")
        else:
            self.logger.debug(f"Project '{name}' already exists")
        return ProjectCreation(name=name, id=str(project_id), status=project_status)

    async def analyze(
        self,
        ecosystem: str,
        packages: List[Dict[str, str]],
        project_name: str,
        group: Optional[str] = None,
        label: str = DEFAULT_LABEL,
    ) -> str:
        """Submit packages for analysis.

        Args:
            ecosystem: Package type understood by the service, e.g. ``maven``
            packages: ``{"name", "version"}`` descriptors
            project_name: Project the job is filed under
            group: Optional group of the project
            label: Free-form job label

        Returns:
            Job id

        Raises:
            AnalysisAPIError: On transport errors or unexpected responses
        """
        project_id = self._project_ids.get(project_name)
        if project_id is None:
            project_id = (await self.create_project(project_name, group)).id

        payload: Dict[str, Any] = {
            "type": ecosystem,
            "packages": packages,
            "is_user": True,
            "project": project_id,
            "label": label,
        }
        if group:
            payload["group_name"] = group

        status, data = await self._post(self.JOBS_PATH, payload)
        if status not in (200, 201) or not data.get("job_id"):
            raise AnalysisAPIError(
                f"Submitting {len(packages)} packages to '{project_name}' failed with HTTP {status}",
                status=status,
                body=json.dumps(data),
            )
        return str(data["job_id"])

    async def _post(self, path: str, payload: Dict[str, Any]) -> Tuple[int, Dict[str, Any]]:
        url = f"{self.config.base_url}{path}"
        session = self._get_session()
        try:
            async with session.post(url, json=payload, headers=self._headers()) as response:
                text = await response.text(errors="replace")
                status = response.status
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise AnalysisAPIError(f"Request to {url} failed: {e}") from e

        if not text:
            return status, {}
        try:
            data = json.loads(text)
        except ValueError as e:
            raise AnalysisAPIError(f"Invalid JSON from {url}", status=status, body=text) from e
        if not isinstance(data, dict):
            raise AnalysisAPIError(f"Unexpected response from {url}", status=status, body=text)
        return status, data

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.config.token:
            headers["Authorization"] = f"Bearer {self.config.token}"
        return headers

    def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session.

        Returns:
            aiohttp ClientSession
        """
        if not self._session or self._session.closed:
            connector = aiohttp.TCPConnector(ssl=self._ssl_context)
            self._session = aiohttp.ClientSession(
                timeout=ClientTimeout(total=self.config.timeout),
                connector=connector
            )
            self._owns_session = True
        return self._session
