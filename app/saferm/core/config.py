"""Run configuration for saferm.

Provides the validated configuration record consumed by the removal
core, the environment settings that adjust it, and GNU rm(1)
compatibility mode.
"""

import os
from collections.abc import Mapping
from enum import Enum

from pydantic import BaseModel, ConfigDict, model_validator

# Environment variable names
DEBUG_MODE = "DEBUG"
GNU_MODE = "SAFERM_GNU_MODE"

# Pairs of options that cannot be combined, by field name and flag name
EXCLUSIVE_OPTIONS: list[tuple[tuple[str, str], tuple[str, str]]] = [
    (("dir_mode", "--dir"), ("recursive", "--recursive")),
    (("force", "--force"), ("interactive", "--interactive")),
    (("quiet", "--quiet"), ("verbose", "--verbose")),
]


class GnuModeError(ValueError):
    """Raised when an option is used that GNU mode does not support."""


class Verbosity(Enum):
    """How much output a run produces.

    Attributes:
        QUIET: Errors only.
        NORMAL: Results, errors and the final summary.
        VERBOSE: Everything, including trace messages.
    """

    QUIET = "quiet"
    NORMAL = "normal"
    VERBOSE = "verbose"


class EnvSettings(BaseModel):
    """Settings taken from the process environment.

    Only the presence of a variable matters, not its value.
    """

    model_config = ConfigDict(frozen=True)

    debug: bool = False
    gnu_mode: bool = False

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] | None = None) -> "EnvSettings":
        """Read settings from an environment mapping.

        Args:
            environ: Environment to read. Defaults to os.environ.

        Returns:
            EnvSettings for the given environment.
        """
        env = os.environ if environ is None else environ
        return cls(debug=DEBUG_MODE in env, gnu_mode=GNU_MODE in env)


class RunConfig(BaseModel):
    """Policy switches for a single removal run.

    Attributes:
        blind: Ignore paths that do not exist.
        dir_mode: Allow removing empty directories.
        force: Remove without prompting.
        interactive: Prompt before every removal.
        no_preserve_root: Do not refuse the filesystem root.
        quiet: Only output errors.
        recursive: Remove directories and their content.
        trash: Move to the trash instead of removing.
        verbose: Explain what is being done.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    blind: bool = False
    dir_mode: bool = False
    force: bool = False
    interactive: bool = False
    no_preserve_root: bool = False
    quiet: bool = False
    recursive: bool = False
    trash: bool = False
    verbose: bool = False

    @model_validator(mode="after")
    def check_exclusive_options(self) -> "RunConfig":
        """Reject combinations of mutually exclusive options."""
        for (field_a, flag_a), (field_b, flag_b) in EXCLUSIVE_OPTIONS:
            if getattr(self, field_a) and getattr(self, field_b):
                msg = f"options {flag_a} and {flag_b} cannot be used together"
                raise ValueError(msg)
        return self

    @property
    def dry_run(self) -> bool:
        """Check if nothing should actually be removed."""
        return not self.force and not self.interactive

    @property
    def verbosity(self) -> Verbosity:
        """Output verbosity for this run.

        --quiet only takes effect when something is actually removed.
        """
        if self.quiet and not self.dry_run:
            return Verbosity.QUIET
        if self.verbose:
            return Verbosity.VERBOSE
        return Verbosity.NORMAL

    def with_environment(self, env: EnvSettings) -> "RunConfig":
        """Apply environment settings to this configuration.

        Args:
            env: Settings read from the environment.

        Returns:
            A new RunConfig with GNU mode and debug mode applied.

        Raises:
            GnuModeError: If GNU mode is on and an unsupported option is used.
        """
        config = self.to_gnu_mode() if env.gnu_mode else self
        if env.debug:
            config = config.model_copy(update={"verbose": True})
        return config

    def to_gnu_mode(self) -> "RunConfig":
        """Translate this configuration to GNU rm(1) semantics.

        rm(1) ignores missing paths with --force, removes unless
        --interactive is used, is always quiet, and has no trash.

        Returns:
            A new RunConfig behaving like rm(1).

        Raises:
            GnuModeError: If --blind, --quiet or --trash is used without --force.
        """
        if not self.force:
            for name in ("blind", "quiet", "trash"):
                if getattr(self, name):
                    msg = f"option --{name} not supported in GNU mode"
                    raise GnuModeError(msg)

        return self.model_copy(
            update={
                "blind": self.force,
                "force": not self.interactive,
                "quiet": True,
                "trash": False,
            }
        )
