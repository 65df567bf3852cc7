#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdchangemarks/options.py
"""Options controlling annotation, stripping and diff computation.

Options are immutable: use :meth:`AnnotationOptions.create_updated` to derive
a modified copy, for example when CLI arguments override values loaded from a
configuration file.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, fields, replace
from typing import Any, Mapping

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from mdchangemarks.constants import (
    DEFAULT_APPEND_FOOTER,
    DEFAULT_DIFF_PROVIDER,
    DEFAULT_DIFF_TIMEOUT,
    DEFAULT_DROP_SUMMARY_SECTION,
    DEFAULT_GIT_EXECUTABLE,
    DiffProviderName,
)
from mdchangemarks.exceptions import ValidationError

_VALID_PROVIDERS = ("difflib", "git")


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class AnnotationOptions(CloneFrozenMixin):
    """Configuration for a document transformation.

    Parameters
    ----------
    diff_provider : {"difflib", "git"}, default "difflib"
        Line-diff implementation. ``difflib`` runs in-process; ``git`` shells
        out to ``git diff --no-index --unified=0`` on temporary files.
    git_executable : str, default "git"
        Executable used by the git diff provider and the repository helpers.
    diff_timeout : float, default 60.0
        Seconds to wait for an external diff process before failing.
    append_footer : bool, default True
        Append the provenance footer after the annotated document.
    drop_summary_section : bool, default True
        When stripping, drop everything from a ``## Summary of Changes``
        heading to the end of the document (legacy behaviour). Annotation
        never drops it from the new document.

    """

    diff_provider: DiffProviderName = field(
        default=DEFAULT_DIFF_PROVIDER,
        metadata={"help": "Line-diff implementation: difflib (in-process) or git"},
    )
    git_executable: str = field(
        default=DEFAULT_GIT_EXECUTABLE,
        metadata={"help": "Git executable used for diffs and repository access"},
    )
    diff_timeout: float = field(
        default=DEFAULT_DIFF_TIMEOUT,
        metadata={"help": "Timeout in seconds for the external diff process", "type": float},
    )
    append_footer: bool = field(
        default=DEFAULT_APPEND_FOOTER,
        metadata={"help": "Append the provenance footer to annotated documents"},
    )
    drop_summary_section: bool = field(
        default=DEFAULT_DROP_SUMMARY_SECTION,
        metadata={"help": "Drop a trailing '## Summary of Changes' section when stripping markers"},
    )

    def __post_init__(self) -> None:
        """Validate option values.

        Raises
        ------
        ValidationError
            If any field value is outside its valid range.

        """
        if self.diff_provider not in _VALID_PROVIDERS:
            raise ValidationError(
                f"diff_provider must be one of {', '.join(_VALID_PROVIDERS)}, got {self.diff_provider!r}",
                parameter_name="diff_provider",
                parameter_value=self.diff_provider,
            )
        if self.diff_timeout <= 0:
            raise ValidationError(
                f"diff_timeout must be positive, got {self.diff_timeout}",
                parameter_name="diff_timeout",
                parameter_value=self.diff_timeout,
            )
        if not self.git_executable:
            raise ValidationError("git_executable must not be empty", parameter_name="git_executable")

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> "AnnotationOptions":
        """Build options from a configuration mapping, ignoring unknown keys.

        Keys may use hyphens or underscores (``diff-provider`` and
        ``diff_provider`` are equivalent).

        Parameters
        ----------
        config : Mapping[str, Any]
            Configuration values, typically loaded from a config file

        Returns
        -------
        AnnotationOptions
            Options with the recognised values applied

        """
        known = {f.name for f in fields(cls)}
        values = {}
        for key, value in config.items():
            name = str(key).replace("-", "_")
            if name in known:
                values[name] = value
        if "diff_timeout" in values:
            try:
                values["diff_timeout"] = float(values["diff_timeout"])
            except (TypeError, ValueError) as e:
                raise ValidationError(
                    f"diff_timeout must be a number, got {values['diff_timeout']!r}",
                    parameter_name="diff_timeout",
                    parameter_value=values["diff_timeout"],
                    original_error=e,
                ) from e
        return cls(**values)
