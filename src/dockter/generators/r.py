"""
R ecosystem.

Installs R from the CRAN apt repository for the base Ubuntu release and
installs R packages into a user library. Package names come from the
environment when present, otherwise from an existing ``DESCRIPTION`` file.
"""

from __future__ import annotations

import logging

from . import tables
from .ecosystem import Ecosystem

logger = logging.getLogger(__name__)

USER_LIBRARY = "~/R"


class REcosystem(Ecosystem):
    """Generates Dockerfile content for R projects."""

    runtime_platform = "R"
    description = "R packages installed from CRAN"

    def applies(self) -> bool:
        return super().applies() or self.workspace.exists(tables.R_DESCRIPTION_FILE)

    def env_vars(self) -> list[tuple[str, str]]:
        return [("TZ", "Etc/UTC"), ("R_LIBS_USER", USER_LIBRARY)]

    def apt_repos(self) -> list[tuple[str, str | None]]:
        codename = self.sys_version_name()
        if codename is None:
            logger.debug("No CRAN repository for base version %s", self.base_version())
            return []
        return [(tables.CRAN_REPOSITORY.format(codename=codename), tables.CRAN_KEY_ID)]

    def apt_packages(self) -> list[str]:
        return ["r-base"] + super().apt_packages()

    def generate_package_list(self) -> str:
        """
        Package list content: one package name per line.

        CRAN installs the current version of each package, so version
        constraints are not written.
        """
        packages = self.packages(self.runtime_platform)
        pinned = [pkg.name for pkg in packages if pkg.version]
        if pinned:
            logger.debug("Ignoring version constraints for R packages: %s", ", ".join(pinned))
        return "\n".join(pkg.name for pkg in packages)

    def install_files(self) -> list[tuple[str, str]]:
        if self.packages(self.runtime_platform):
            filename = tables.R_GENERATED_PACKAGES_FILE
            self.workspace.write(filename, self.generate_package_list())
            return [(filename, ".")]
        if self.workspace.exists(tables.R_DESCRIPTION_FILE):
            description = self.workspace.read(tables.R_DESCRIPTION_FILE)
            logger.debug("Using existing DESCRIPTION (%d lines)", len(description.splitlines()))
            return [(tables.R_DESCRIPTION_FILE, ".")]
        return []

    def install_command(self) -> str | None:
        target = f'lib="{USER_LIBRARY}", repos="{tables.CRAN_MIRROR}"'
        if self.packages(self.runtime_platform):
            script = f'install.packages(readLines("{tables.R_GENERATED_PACKAGES_FILE}"), {target})'
        elif self.workspace.exists(tables.R_DESCRIPTION_FILE):
            script = (
                f'install.packages("remotes", {target}); '
                f'remotes::install_deps(".", {target})'
            )
        else:
            return None
        return f"mkdir -p {USER_LIBRARY} && Rscript -e '{script}'"

    def project_files(self) -> list[tuple[str, str]]:
        main = self._first_existing(tables.R_ENTRY_POINTS)
        return [(main, main)] if main else []

    def run_command(self) -> str | None:
        main = self._first_existing(tables.R_ENTRY_POINTS)
        return f"Rscript {main}" if main else None
