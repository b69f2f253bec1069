"""Running the Gradle build tool as a subprocess."""

import asyncio
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from ..core.parsers.base import ModuleRef
from ..errors import BuildFailedError, GradleNotFoundError
from ..utils.logging import get_logger

BUILD_FAILED_SENTINEL = "BUILD FAILED"


@dataclass(frozen=True)
class InvocationStrategy:
    """One way of starting Gradle."""

    name: str
    executable: str

    def command(self, args: Sequence[str]) -> List[str]:
        return [self.executable, *args]


# Tried in order, first one that starts wins
DEFAULT_STRATEGIES = (
    InvocationStrategy("local wrapper", "./gradlew"),
    InvocationStrategy("parent wrapper", "../gradlew"),
    InvocationStrategy("global binary", "gradle"),
)


@dataclass
class GradleOutput:
    """Captured result of one Gradle invocation."""

    args: List[str]
    strategy: InvocationStrategy
    stdout: str
    stderr: str
    returncode: int

    @property
    def build_failed(self) -> bool:
        return BUILD_FAILED_SENTINEL in self.stdout or BUILD_FAILED_SENTINEL in self.stderr


class GradleInvoker:
    """Runs Gradle tasks for a project directory."""

    def __init__(
        self,
        project_dir: Optional[Path] = None,
        strategies: Sequence[InvocationStrategy] = DEFAULT_STRATEGIES,
    ) -> None:
        """Initialize the invoker.

        Args:
            project_dir: Working directory for Gradle, defaults to the current one
            strategies: Invocation strategies, tried in order
        """
        self.project_dir = project_dir or Path.cwd()
        self.strategies = tuple(strategies)
        self.logger = get_logger("GradleInvoker")

    async def run(self, args: Sequence[str]) -> GradleOutput:
        """Run Gradle with the first strategy that can be started.

        Args:
            args: Gradle command line arguments

        Returns:
            Captured output

        Raises:
            GradleNotFoundError: If no strategy could start Gradle
        """
        args = list(args)
        for strategy in self.strategies:
            try:
                process = await asyncio.create_subprocess_exec(
                    *strategy.command(args),
                    cwd=str(self.project_dir),
                    stdout=asyncio.subprocess.PIPE,
                    stderr=asyncio.subprocess.PIPE,
                )
            except OSError as e:
                self.logger.debug(f"Gradle {strategy.name} ({strategy.executable}) unavailable: {e}")
                continue

            stdout, stderr = await process.communicate()
            self.logger.debug(f"Ran `{' '.join(strategy.command(args))}` (exit {process.returncode})")
            return GradleOutput(
                args=args,
                strategy=strategy,
                stdout=stdout.decode("utf-8", errors="replace"),
                stderr=stderr.decode("utf-8", errors="replace"),
                returncode=process.returncode if process.returncode is not None else 0,
            )

        raise GradleNotFoundError(
            "It doesn't look like you have `gradle` installed or a gradle wrapper "
            f"in {self.project_dir} or its parent directory",
            args,
        )

    async def projects(self) -> str:
        """Output of ``gradle projects``."""
        output = await self.run(["projects"])
        return self._checked(output)

    async def dependencies(self, module: Optional[ModuleRef] = None) -> str:
        """Output of ``gradle -q dependencies`` for the root or one module.

        Args:
            module: Sub-project to report on, None for the root project

        Returns:
            Report text

        Raises:
            BuildFailedError: If the output contains ``BUILD FAILED``
            GradleNotFoundError: If Gradle could not be started
        """
        task = module.task("dependencies") if module else "dependencies"
        output = await self.run(["-q", task])
        return self._checked(output)

    def _checked(self, output: GradleOutput) -> str:
        if output.build_failed:
            raise BuildFailedError(f"Gradle build failed running {' '.join(output.args)}", output.args)
        if output.returncode != 0:
            self.logger.warning(
                f"Gradle exited with status {output.returncode} running {' '.join(output.args)}"
            )
        return output.stdout
