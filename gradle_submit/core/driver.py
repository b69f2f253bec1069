"""Per-module dependency collection and submission."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Protocol

from ..errors import AnalysisAPIError, GradleInvocationError, NoTargetsResolvedError
from ..utils.logging import get_logger
from ..utils.performance import PerformanceMonitor
from .parsers import GradleReportParser, ModuleDependencySet, ModuleRef, discover_modules

ECOSYSTEM = "maven"


class DependencyReportSource(Protocol):
    """Produces the raw Gradle reports the driver parses."""

    async def projects(self) -> str: ...

    async def dependencies(self, module: Optional[ModuleRef] = None) -> str: ...


class SubmissionService(Protocol):
    """Receives one dependency batch per project."""

    async def create_project(self, name: str, group: Optional[str] = None): ...

    async def analyze(
        self,
        ecosystem: str,
        packages: List[Dict[str, str]],
        project_name: str,
        group: Optional[str] = None,
    ) -> str: ...


@dataclass
class SubmissionOutcome:
    """What happened to one target of a run."""

    module: Optional[ModuleRef]
    project: str
    success: bool
    detail: str
    dependency_count: int = 0
    job_id: Optional[str] = None

    @property
    def target(self) -> str:
        return str(self.module) if self.module else "root"


@dataclass
class RunResult:
    """Outcomes of a run, root first, then modules in discovery order."""

    root_project: str
    modules: List[ModuleRef] = field(default_factory=list)
    outcomes: List[SubmissionOutcome] = field(default_factory=list)

    @property
    def succeeded(self) -> List[SubmissionOutcome]:
        return [outcome for outcome in self.outcomes if outcome.success]

    @property
    def failed(self) -> List[SubmissionOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.success]

    @property
    def total_dependencies(self) -> int:
        return sum(outcome.dependency_count for outcome in self.outcomes)

    @property
    def all_failed(self) -> bool:
        return bool(self.outcomes) and not self.succeeded


class SubmissionDriver:
    """Collects and submits dependencies for the root project and its modules.

    Targets are processed one at a time: discovery, then the root, then each
    module in the order Gradle listed it. A failing target is recorded and
    the run moves on; only a run in which every target failed raises.
    """

    def __init__(
        self,
        gradle: DependencyReportSource,
        client: SubmissionService,
        root_project: str,
        group: Optional[str] = None,
        parser: Optional[GradleReportParser] = None,
        performance_monitor: Optional[PerformanceMonitor] = None,
    ) -> None:
        """Initialize the driver.

        Args:
            gradle: Source of ``projects`` and ``dependencies`` reports
            client: Analysis service client
            root_project: Project name used for the root module
            group: Optional group all projects are filed under
            parser: Report parser, defaults to the test runtime classpath one
            performance_monitor: Optional monitor timing each target
        """
        if not root_project:
            raise ValueError("Root project name cannot be empty")

        self.gradle = gradle
        self.client = client
        self.root_project = root_project
        self.group = group
        self.parser = parser or GradleReportParser()
        self.performance_monitor = performance_monitor or PerformanceMonitor()
        self.logger = get_logger("SubmissionDriver")

    async def run(self) -> RunResult:
        """Process every target.

        Returns:
            Outcomes for the root and each discovered module

        Raises:
            NoTargetsResolvedError: If no target succeeded
        """
        modules = await self.discover_modules()
        result = RunResult(root_project=self.root_project, modules=modules)

        result.outcomes.append(await self.process_target(None))
        for module in modules:
            result.outcomes.append(await self.process_target(module))

        if result.all_failed:
            raise NoTargetsResolvedError(result)
        return result

    async def discover_modules(self) -> List[ModuleRef]:
        """List sub-projects; a failing ``projects`` task means none."""
        self.logger.info("Searching for subprojects, this might take a second...")
        try:
            report = await self.gradle.projects()
        except GradleInvocationError as e:
            self.logger.warning(f"Could not list subprojects: {e}")
            return []

        modules = discover_modules(report)
        self.logger.info(f"Found {len(modules)} additional subprojects")
        return modules

    def project_name(self, module: Optional[ModuleRef]) -> str:
        return module.project_name(self.root_project) if module else self.root_project

    async def process_target(self, module: Optional[ModuleRef]) -> SubmissionOutcome:
        """Collect and submit the dependencies of one target.

        Args:
            module: Sub-project, None for the root project

        Returns:
            The target's outcome; failures are reported, never raised
        """
        project = self.project_name(module)
        with self.performance_monitor.measure(str(module or "root")):
            try:
                report = await self.gradle.dependencies(module)
            except GradleInvocationError as e:
                self.logger.warning(f"Failed to collect dependencies for {project}: {e}")
                return SubmissionOutcome(module, project, success=False, detail=str(e))

            dependencies = self.parser.parse_text(report, module)
            if not dependencies:
                self.logger.info(f"No dependencies reported for {project}")
                return SubmissionOutcome(module, project, success=True, detail="No dependencies to submit")

            return await self._submit(module, project, dependencies)

    async def _submit(
        self,
        module: Optional[ModuleRef],
        project: str,
        dependencies: ModuleDependencySet,
    ) -> SubmissionOutcome:
        count = len(dependencies)
        self.logger.info(f"Submitting {count} packages to project {project}")
        try:
            await self.client.create_project(project, self.group)
            job_id = await self.client.analyze(ECOSYSTEM, dependencies.to_packages(), project, self.group)
        except AnalysisAPIError as e:
            self.logger.warning(f"Submission for {project} failed: {e}")
            return SubmissionOutcome(module, project, success=False, detail=str(e), dependency_count=count)

        self.logger.info(f"Job submitted for analysis with job ID: {job_id}")
        return SubmissionOutcome(
            module,
            project,
            success=True,
            detail=f"Submitted {count} packages",
            dependency_count=count,
            job_id=job_id,
        )
