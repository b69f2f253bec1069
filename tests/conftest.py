"""Shared fixtures: captured Gradle report output and service stand-ins."""

import asyncio
import stat
import threading

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer as AiohttpTestServer

DEPENDENCY_REPORT = """\

> Task :dependencies

------------------------------------------------------------
Root project 'myapp'
------------------------------------------------------------

compileClasspath - Compile classpath for source set 'main'.
+--- org.apache.hadoop:hadoop-core:1.0.2
\\--- com.example:compile-only:2.0

testRuntimeClasspath - Runtime classpath of source set 'test'.
+--- org.apache.hadoop:hadoop-core:1.0.2
|    +--- commons-cli:commons-cli:1.2
|    +--- xmlenc:xmlenc:0.52
|    +--- commons-httpclient:commons-httpclient:3.0.1
|    |    +--- junit:junit:3.8.1 -> 4.12
|    |    |    \\--- org.hamcrest:hamcrest-core:1.3
|    |    \\--- commons-logging:commons-logging:1.0.3 -> 1.1.1
|    \\--- commons-logging:commons-logging:1.1.1 (*)
+--- project :shared
|    \\--- com.google.guava:guava:31.1-jre
+--- xmlenc:xmlenc:{strictly 0.52} -> 0.52 (c)
+--- org.slf4j:slf4j-api:1.7.36 (n)
\\--- junit:junit:4.12

(c) - dependency constraint
(*) - dependencies omitted (listed previously)

A web-based, searchable dependency report is available by adding the --scan option.
"""

# Unique (name, resolved version) pairs in the testRuntimeClasspath section above
EXPECTED_TEST_RUNTIME = {
    ("org.apache.hadoop:hadoop-core", "1.0.2"),
    ("commons-cli:commons-cli", "1.2"),
    ("xmlenc:xmlenc", "0.52"),
    ("commons-httpclient:commons-httpclient", "3.0.1"),
    ("junit:junit", "4.12"),
    ("org.hamcrest:hamcrest-core", "1.3"),
    ("commons-logging:commons-logging", "1.1.1"),
    ("com.google.guava:guava", "31.1-jre"),
}

PROJECTS_REPORT = """\

> Task :projects

------------------------------------------------------------
Root project 'myapp'
------------------------------------------------------------

Root project 'myapp'
+--- Project ':api' - Public API
+--- Project ':core'
|    \\--- Project ':core:util'
\\--- Project ':web'

To see a list of the tasks of a project, run gradle <project-path>:tasks
For example, try running gradle :api:tasks
"""


@pytest.fixture
def dependency_report():
    """Output of `gradle -q dependencies` for a small build."""
    return DEPENDENCY_REPORT


@pytest.fixture
def projects_report():
    """Output of `gradle projects` for a build with three top-level modules."""
    return PROJECTS_REPORT


@pytest.fixture
def report_file(tmp_path, dependency_report):
    """Dependency report saved to disk."""
    path = tmp_path / "gradle-dependencies.txt"
    path.write_text(dependency_report)
    return path


def write_script(path, body):
    """Create an executable shell script standing in for Gradle."""
    path.write_text("#!/bin/sh\n" + body + "\n")
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


class FakeAnalysisService:
    """In-process stand-in for the service's project and job endpoints.

    Jobs for projects named in ``garbled`` get a 502 whose body is not UTF-8.
    """

    def __init__(self, existing=None, job_status=200, garbled=()):
        self.existing = dict(existing or {})
        self.job_status = job_status
        self.garbled = set(garbled)
        self.requests = []

    def app(self):
        app = web.Application()
        app.router.add_post("/v0/data/projects", self.create_project)
        app.router.add_post("/v0/data/jobs", self.create_job)
        return app

    def project_names(self, kind="projects"):
        return [body["name"] for request_kind, body, _ in self.requests if request_kind == kind]

    async def create_project(self, request):
        body = await request.json()
        self.requests.append(("projects", body, request.headers.get("Authorization")))
        name = body["name"]
        if name in self.existing:
            return web.json_response({"id": self.existing[name]}, status=409)
        self.existing[name] = f"p-{len(self.existing) + 1}"
        return web.json_response({"id": self.existing[name]}, status=201)

    async def create_job(self, request):
        body = await request.json()
        self.requests.append(("jobs", body, request.headers.get("Authorization")))
        names = {project_id: name for name, project_id in self.existing.items()}
        if names.get(body["project"]) in self.garbled:
            return web.Response(
                body=b"\xff\xfe\x00bad gateway\x9c", status=502, content_type="text/html", charset="utf-8"
            )
        if self.job_status != 200:
            return web.json_response({"error": "boom"}, status=self.job_status)
        return web.json_response({"job_id": "job-42"})


@pytest.fixture
def analysis_service():
    """A FakeAnalysisService served from a background thread.

    Yields ``(service, base_url)``; code under test may run its own event loop.
    """
    service = FakeAnalysisService()
    loop = asyncio.new_event_loop()
    thread = threading.Thread(target=loop.run_forever, daemon=True)
    thread.start()

    server = AiohttpTestServer(service.app())
    asyncio.run_coroutine_threadsafe(server.start_server(), loop).result(10)
    try:
        yield service, str(server.make_url("/"))
    finally:
        asyncio.run_coroutine_threadsafe(server.close(), loop).result(10)
        loop.call_soon_threadsafe(loop.stop)
        thread.join(10)
        loop.close()


SMALL_REPORT = "testRuntimeClasspath\n+--- {coordinate}\n\n"


def small_report(coordinate):
    return SMALL_REPORT.format(coordinate=coordinate)


class FakeGradle:
    """Serves canned reports; exceptions in ``reports`` are raised instead."""

    def __init__(self, projects_report, reports):
        self.projects_report = projects_report
        self.reports = reports
        self.calls = []

    async def projects(self):
        self.calls.append("projects")
        if isinstance(self.projects_report, Exception):
            raise self.projects_report
        return self.projects_report

    async def dependencies(self, module=None):
        key = module.path if module else "root"
        self.calls.append(key)
        report = self.reports[key]
        if isinstance(report, Exception):
            raise report
        return report
