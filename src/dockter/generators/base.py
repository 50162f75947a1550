"""
Dockerfile assembly.

``Generator`` owns the fixed order of Dockerfile stages and asks an
``Ecosystem`` for the content of each one. Stages without content are
omitted entirely. The result is returned and also written to
``.Dockerfile`` in the project folder, which Docker builds from and
which downstream tools re-parse using the ``# dockter`` marker.

Stage order:
1. Header comment (optional)
2. FROM
3. Early exit when the ecosystem does not apply
4. ENV
5. Apt repositories
6. Apt packages
7. Switch to a non-root user
8. ``# dockter`` marker
9. COPY install files
10. RUN install command
11. COPY project files
12. CMD
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from ..core.workspace import Workspace
from .ecosystem import Ecosystem

logger = logging.getLogger(__name__)

MANAGED_DOCKERFILE = ".Dockerfile"
MANAGED_MARKER = "# dockter"

USER_NAME = "dockteruser"
USER_ID = 1001
KEYSERVER = "keyserver.ubuntu.com"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(moment: datetime) -> str:
    """Format a moment as ISO-8601 UTC with milliseconds, e.g. 2018-10-10T09:30:00.000Z."""
    utc = moment.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def escape_env_value(value: str) -> str:
    """
    Escape a value for a double-quoted ENV pair.

    Only the first double quote is escaped; downstream parsers of the
    managed Dockerfile rely on this exact form.
    """
    if value.count('"') > 1:
        logger.warning(
            "ENV value contains %d double quotes; only the first is escaped: %s",
            value.count('"'),
            value,
        )
    return value.replace('"', '\\"', 1)


class Generator:
    """
    Generates a Dockerfile for an ecosystem.

    A generator is one-shot per project folder and ecosystem; it holds no
    state between calls to ``generate``.

    Example:
        context = GenerationContext(environ, Workspace("./project"))
        generator = Generator(PythonEcosystem(context), version="0.3.0")
        dockerfile = generator.generate(header=False)

    Args:
        ecosystem: Ecosystem answering the stage hooks
        version: Tool version shown in the header
        clock: Source of the header timestamp
    """

    def __init__(
        self,
        ecosystem: Ecosystem,
        *,
        version: str,
        clock: Callable[[], datetime] | None = None,
    ):
        self.ecosystem = ecosystem
        self.version = version
        self.clock = clock or _utc_now

    @property
    def workspace(self) -> Workspace:
        return self.ecosystem.workspace

    def generate(self, header: bool = True) -> str:
        """
        Generate the Dockerfile.

        Args:
            header: Whether to add a generated-by header comment

        Returns:
            Dockerfile text, also written to ``.Dockerfile``
        """
        eco = self.ecosystem
        dockerfile = ""

        if header:
            dockerfile += self._header()

        dockerfile += f"FROM {eco.base_identifier()}\n"

        if not eco.applies():
            logger.debug("%s does not apply; emitting FROM only", eco.runtime_platform)
            self.workspace.write(MANAGED_DOCKERFILE, dockerfile)
            return dockerfile

        env_vars = eco.env_vars()
        apt_repos = eco.apt_repos()
        apt_packages = eco.apt_packages()
        install_files = eco.install_files()
        install_command = eco.install_command()
        project_files = eco.project_files()
        run_command = eco.run_command()

        dockerfile += self._env_block(env_vars)
        dockerfile += self._apt_repos_block(apt_repos)
        dockerfile += self._apt_packages_block(apt_packages)

        # Everything after this runs as an unprivileged user
        dockerfile += (
            f"\nRUN useradd --create-home --uid {USER_ID} -s /bin/bash {USER_NAME}\n"
            f"USER {USER_NAME}\n"
            f"WORKDIR /home/{USER_NAME}\n"
        )

        if install_command:
            dockerfile += f"\n{MANAGED_MARKER}\n"

        for src, dest in install_files:
            dockerfile += f"\nCOPY {src} {dest}\n"

        if install_command:
            dockerfile += f"RUN {install_command}\n"

        if project_files:
            copies = [f"COPY {src} {dest}" for src, dest in project_files]
            dockerfile += "\n" + "\n".join(copies) + "\n"

        if run_command:
            dockerfile += f"\nCMD {run_command}\n"

        self.workspace.write(MANAGED_DOCKERFILE, dockerfile)
        logger.debug(
            "Generated %s for %s (%d apt packages, %d install files)",
            MANAGED_DOCKERFILE,
            eco.runtime_platform,
            len(apt_packages),
            len(install_files),
        )
        return dockerfile

    def _header(self) -> str:
        timestamp = format_timestamp(self.clock())
        return (
            f"# Generated by Dockter {self.version} at {timestamp}\n"
            "# To stop Dockter generating this file and start editing it yourself, "
            'rename it to "Dockerfile".\n\n'
        )

    def _env_block(self, env_vars: list[tuple[str, str]]) -> str:
        if not env_vars:
            return ""
        pairs = [f'{key}="{escape_env_value(value)}"' for key, value in env_vars]
        return "\nENV " + " \\\n    ".join(pairs) + "\n"

    def _apt_repos_block(self, apt_repos: list[tuple[str, str | None]]) -> str:
        if not apt_repos:
            return ""

        # Tools needed to add repositories
        block = (
            "\nRUN apt-get update \\\n"
            " && DEBIAN_FRONTEND=noninteractive apt-get install -y \\\n"
            "      apt-transport-https \\\n"
            "      ca-certificates \\\n"
            "      software-properties-common\n"
        )
        for deb, key in apt_repos:
            block += f'\nRUN apt-add-repository "{deb}"'
            if key:
                block += f" \\\n && apt-key adv --keyserver {KEYSERVER} --recv-keys {key}"
            block += "\n"
        return block

    def _apt_packages_block(self, apt_packages: list[str]) -> str:
        if not apt_packages:
            return ""
        return (
            "\nRUN apt-get update \\\n"
            " && DEBIAN_FRONTEND=noninteractive apt-get install -y \\\n"
            "      " + " \\\n      ".join(apt_packages) + " \\\n"
            " && apt-get autoremove -y \\\n"
            " && apt-get clean \\\n"
            " && rm -rf /var/lib/apt/lists/*\n"
        )
