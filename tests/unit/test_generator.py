"""Tests for Dockerfile assembly in Generator."""

from pathlib import Path

import pytest

from dockter.core.context import SoftwareEnvironment, SoftwarePackage
from dockter.core.workspace import Workspace
from dockter.generators import (
    MANAGED_DOCKERFILE,
    Ecosystem,
    GenerationContext,
    Generator,
    PythonEcosystem,
    REcosystem,
)
from dockter.generators.base import escape_env_value, format_timestamp


class KitchenSinkEcosystem(Ecosystem):
    """Ecosystem that fills every stage."""

    runtime_platform = "Sink"

    def base_name(self) -> str:
        return "debian"

    def base_version(self) -> str:
        return "stretch"

    def env_vars(self) -> list[tuple[str, str]]:
        return [("LANG", "C.UTF-8"), ("GREETING", 'say "hi"')]

    def apt_repos(self) -> list[tuple[str, str | None]]:
        return [("deb http://example.org/one stable main", "ABC123"), ("ppa:example/two", None)]

    def apt_packages(self) -> list[str]:
        return ["curl", "git"]

    def install_files(self) -> list[tuple[str, str]]:
        return [("a.lock", "."), ("b.lock", "sub/")]

    def install_command(self) -> str | None:
        return "sink install"

    def project_files(self) -> list[tuple[str, str]]:
        return [("src", "src"), ("run.sh", "run.sh")]

    def run_command(self) -> str | None:
        return "./run.sh"


def sink_environ() -> SoftwareEnvironment:
    return SoftwareEnvironment(
        software_requirements=[SoftwarePackage(name="anything", runtime_platform="Sink")]
    )


def make_generator(ecosystem_class: type[Ecosystem], environ, folder: Path, **kwargs) -> Generator:
    context = GenerationContext(environ=environ, workspace=Workspace(folder))
    return Generator(ecosystem_class(context), version="0.3.0", **kwargs)


KITCHEN_SINK = """\
FROM debian:stretch

ENV LANG="C.UTF-8" \\
    GREETING="say \\"hi""

RUN apt-get update \\
 && DEBIAN_FRONTEND=noninteractive apt-get install -y \\
      apt-transport-https \\
      ca-certificates \\
      software-properties-common

RUN apt-add-repository "deb http://example.org/one stable main" \\
 && apt-key adv --keyserver keyserver.ubuntu.com --recv-keys ABC123

RUN apt-add-repository "ppa:example/two"

RUN apt-get update \\
 && DEBIAN_FRONTEND=noninteractive apt-get install -y \\
      curl \\
      git \\
 && apt-get autoremove -y \\
 && apt-get clean \\
 && rm -rf /var/lib/apt/lists/*

RUN useradd --create-home --uid 1001 -s /bin/bash dockteruser
USER dockteruser
WORKDIR /home/dockteruser

# dockter

COPY a.lock .

COPY b.lock sub/
RUN sink install

COPY src src
COPY run.sh run.sh

CMD ./run.sh
"""


class TestStageAssembly:
    """Byte-level layout of generated Dockerfiles."""

    def test_all_stages(self, tmp_path: Path) -> None:
        generator = make_generator(KitchenSinkEcosystem, sink_environ(), tmp_path)
        assert generator.generate(False) == KITCHEN_SINK

    def test_written_to_managed_dockerfile(self, tmp_path: Path) -> None:
        generator = make_generator(KitchenSinkEcosystem, sink_environ(), tmp_path)
        dockerfile = generator.generate(False)

        assert (tmp_path / MANAGED_DOCKERFILE).read_text() == dockerfile
        assert not (tmp_path / "Dockerfile").exists()

    def test_early_exit_still_writes_file(self, tmp_path: Path) -> None:
        generator = make_generator(KitchenSinkEcosystem, SoftwareEnvironment(), tmp_path)

        assert generator.generate(False) == "FROM debian:stretch\n"
        assert (tmp_path / MANAGED_DOCKERFILE).read_text() == "FROM debian:stretch\n"

    def test_empty_base_version_omits_tag(self, tmp_path: Path) -> None:
        class Untagged(Ecosystem):
            def base_name(self) -> str:
                return "scratch"

            def base_version(self) -> str:
                return ""

        generator = make_generator(Untagged, SoftwareEnvironment(), tmp_path)
        assert generator.generate(False) == "FROM scratch\n"

    @pytest.mark.parametrize("ecosystem_class", [Ecosystem, PythonEcosystem, REcosystem])
    def test_empty_environment_gives_from_only(
        self, ecosystem_class: type[Ecosystem], tmp_path: Path
    ) -> None:
        generator = make_generator(ecosystem_class, SoftwareEnvironment(), tmp_path)
        assert generator.generate(False) == "FROM ubuntu:18.04\n"

    def test_no_marker_without_install_command(self, tmp_path: Path) -> None:
        environ = SoftwareEnvironment(
            software_requirements=[SoftwarePackage(name="curl", runtime_platform="deb")]
        )
        dockerfile = make_generator(Ecosystem, environ, tmp_path).generate(False)

        assert "# dockter" not in dockerfile
        assert "      curl \\\n" in dockerfile
        assert dockerfile.endswith("WORKDIR /home/dockteruser\n")

    def test_marker_appears_once(self, tmp_path: Path) -> None:
        dockerfile = make_generator(KitchenSinkEcosystem, sink_environ(), tmp_path).generate(False)
        assert dockerfile.count("# dockter\n") == 1

    def test_user_switch_between_apt_and_install(self, tmp_path: Path) -> None:
        dockerfile = make_generator(KitchenSinkEcosystem, sink_environ(), tmp_path).generate(False)

        last_apt_install = dockerfile.rindex("apt-get install")
        user = dockerfile.index("USER dockteruser")
        first_copy = dockerfile.index("COPY ")
        assert last_apt_install < user < first_copy

    def test_idempotent(self, tmp_path: Path) -> None:
        environ = SoftwareEnvironment(
            software_requirements=[
                SoftwarePackage(name="arrow", version="==0.12.1", runtime_platform="Python")
            ]
        )
        first = make_generator(PythonEcosystem, environ, tmp_path).generate(False)
        second = make_generator(PythonEcosystem, environ, tmp_path).generate(False)
        assert first == second

    def test_environment_not_mutated(self, tmp_path: Path) -> None:
        environ = sink_environ()
        snapshot = environ.model_dump()
        make_generator(KitchenSinkEcosystem, environ, tmp_path).generate(True)
        assert environ.model_dump() == snapshot


class TestHeader:
    """The optional generated-by header."""

    def test_header(self, tmp_path: Path, fixed_clock) -> None:
        generator = make_generator(
            Ecosystem, SoftwareEnvironment(), tmp_path, clock=fixed_clock
        )
        assert generator.generate(True) == (
            "# Generated by Dockter 0.3.0 at 2018-10-10T09:30:00.123Z\n"
            "# To stop Dockter generating this file and start editing it yourself, "
            'rename it to "Dockerfile".\n'
            "\n"
            "FROM ubuntu:18.04\n"
        )

    def test_header_default_on(self, tmp_path: Path, fixed_clock) -> None:
        generator = make_generator(
            Ecosystem, SoftwareEnvironment(), tmp_path, clock=fixed_clock
        )
        assert generator.generate().startswith("# Generated by Dockter 0.3.0 at ")

    def test_header_does_not_change_body(self, tmp_path: Path, fixed_clock) -> None:
        generator = make_generator(
            KitchenSinkEcosystem, sink_environ(), tmp_path, clock=fixed_clock
        )
        with_header = generator.generate(True)
        assert with_header.endswith(KITCHEN_SINK)


class TestHelpers:
    def test_format_timestamp_converts_to_utc(self) -> None:
        from datetime import datetime, timedelta, timezone

        moment = datetime(2018, 10, 10, 11, 30, tzinfo=timezone(timedelta(hours=2)))
        assert format_timestamp(moment) == "2018-10-10T09:30:00.000Z"

    def test_escape_first_quote_only(self) -> None:
        assert escape_env_value("plain") == "plain"
        assert escape_env_value('a"b') == 'a\\"b'
        assert escape_env_value('a"b"c') == 'a\\"b"c'

    def test_escape_warns_on_multiple_quotes(self, caplog) -> None:
        with caplog.at_level("WARNING", logger="dockter.generators.base"):
            escape_env_value('"quoted"')
        assert "only the first is escaped" in caplog.text
