"""Tests for running Gradle through invocation strategies."""

import asyncio

import pytest

from gradle_submit.core.parsers import ModuleRef
from gradle_submit.errors import BuildFailedError, GradleNotFoundError
from gradle_submit.gradle import DEFAULT_STRATEGIES, GradleInvoker, InvocationStrategy

from conftest import write_script


@pytest.fixture
def build_dir(tmp_path):
    project = tmp_path / "myapp"
    project.mkdir()
    return project


class TestInvocationStrategies:
    """Test the ordered fallback between ways of starting Gradle."""

    def test_default_order(self):
        assert [s.executable for s in DEFAULT_STRATEGIES] == ["./gradlew", "../gradlew", "gradle"]

    def test_command(self):
        strategy = InvocationStrategy("local wrapper", "./gradlew")
        assert strategy.command(["-q", "dependencies"]) == ["./gradlew", "-q", "dependencies"]

    def test_local_wrapper_wins(self, build_dir):
        write_script(build_dir / "gradlew", 'echo "local $@"')
        write_script(build_dir.parent / "gradlew", 'echo "parent $@"')

        output = asyncio.run(GradleInvoker(build_dir).run(["projects"]))

        assert output.strategy.name == "local wrapper"
        assert output.stdout == "local projects\n"
        assert output.returncode == 0

    def test_falls_back_to_parent_wrapper(self, build_dir):
        write_script(build_dir.parent / "gradlew", 'echo "parent $@"')

        output = asyncio.run(GradleInvoker(build_dir).run(["projects"]))

        assert output.strategy.name == "parent wrapper"
        assert output.stdout == "parent projects\n"

    def test_skips_non_executable_wrapper(self, build_dir):
        (build_dir / "gradlew").write_text("#!/bin/sh\necho local\n")
        write_script(build_dir.parent / "gradlew", "echo parent")

        output = asyncio.run(GradleInvoker(build_dir).run(["projects"]))
        assert output.stdout == "parent\n"

    def test_nothing_available(self, build_dir):
        invoker = GradleInvoker(build_dir, strategies=[
            InvocationStrategy("local wrapper", "./gradlew"),
            InvocationStrategy("global binary", "gradle-does-not-exist-anywhere"),
        ])

        with pytest.raises(GradleNotFoundError) as excinfo:
            asyncio.run(invoker.run(["projects"]))
        assert excinfo.value.gradle_args == ["projects"]


class TestGradleTasks:
    """Test the projects and dependencies helpers."""

    def test_root_dependencies_args(self, build_dir):
        write_script(build_dir / "gradlew", 'echo "$@"')
        report = asyncio.run(GradleInvoker(build_dir).dependencies())
        assert report == "-q dependencies\n"

    def test_module_dependencies_args(self, build_dir):
        write_script(build_dir / "gradlew", 'echo "$@"')
        report = asyncio.run(GradleInvoker(build_dir).dependencies(ModuleRef(":sub1")))
        assert report == "-q :sub1:dependencies\n"

    def test_projects_report(self, build_dir, projects_report):
        (build_dir / "projects.txt").write_text(projects_report)
        write_script(build_dir / "gradlew", "cat projects.txt")

        report = asyncio.run(GradleInvoker(build_dir).projects())
        assert report == projects_report

    @pytest.mark.parametrize("body", [
        "echo 'BUILD FAILED in 2s'",
        "echo 'some output'; echo 'BUILD FAILED in 2s'",
        "echo 'FAILURE: Build failed' >&2; echo 'BUILD FAILED in 2s' >&2; exit 1",
    ])
    def test_build_failed_sentinel(self, build_dir, body):
        write_script(build_dir / "gradlew", body)

        with pytest.raises(BuildFailedError):
            asyncio.run(GradleInvoker(build_dir).dependencies(ModuleRef(":sub1")))

    def test_nonzero_exit_without_sentinel_returns_output(self, build_dir):
        write_script(build_dir / "gradlew", "echo partial; exit 3")
        report = asyncio.run(GradleInvoker(build_dir).dependencies())
        assert report == "partial\n"
