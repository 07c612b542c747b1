"""Runtime context for a single dotlink invocation.

Collects the values the reconciler needs from the environment once, at
construction, so the rest of the code never reads process globals.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from dotlink.core.paths import HOME_ENV_VAR, ROOT_ENV_VAR, resolve_root
from dotlink.models.manifest import Manifest


@dataclass
class LinkContext:
    """Explicit configuration threaded into the reconciler.

    Attributes:
        manifest_path: Where the manifest is persisted.
        declared_root: Store root from the manifest settings.
        env_root: Store root from the environment.
        home: Home directory used for ``~`` expansion, None if unknown.
    """

    manifest_path: Path
    declared_root: str | None = None
    env_root: str | None = None
    home: Path | None = None
    _root: Path | None = field(default=None, init=False, repr=False)

    @classmethod
    def from_environment(
        cls,
        manifest_path: Path,
        manifest: Manifest,
        environ: Mapping[str, str] | None = None,
    ) -> "LinkContext":
        """Build a context from a loaded manifest and an environment mapping.

        Args:
            manifest_path: Path the manifest was loaded from.
            manifest: The loaded manifest.
            environ: Environment variables. If None, uses os.environ.

        Returns:
            A new LinkContext.
        """
        env = os.environ if environ is None else environ
        home = env.get(HOME_ENV_VAR)
        return cls(
            manifest_path=manifest_path,
            declared_root=manifest.settings.dotlink_root,
            env_root=env.get(ROOT_ENV_VAR) or None,
            home=Path(home) if home else None,
        )

    @property
    def root(self) -> Path:
        """Canonical store root, resolved on first access.

        Raises:
            RootUnresolvableError: If no usable root is configured.
        """
        if self._root is None:
            self._root = resolve_root(self.declared_root, self.env_root, self.home)
        return self._root
