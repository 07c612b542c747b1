"""Shared setup and error handling for CLI commands.

Every command loads the manifest, builds a runtime context and runs one
reconciler action. Fatal conditions surface as exceptions from the core
and are mapped to a message and exit code 1 here, and only here.
"""

import logging
import os
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import typer
from rich.markup import escape

from dotlink.core.context import LinkContext
from dotlink.core.manifest import (
    ManifestError,
    ManifestNotFoundError,
    find_manifest,
    load_manifest,
)
from dotlink.core.paths import MANIFEST_FILENAME, ROOT_ENV_VAR, PathError
from dotlink.core.reconciler import Reconciler
from dotlink.utils.formatting import print_error, print_info

logger = logging.getLogger(__name__)


@contextmanager
def fatal_errors() -> Iterator[None]:
    """Turn fatal errors into an error message and exit code 1.

    Raises:
        typer.Exit: If a manifest, path or I/O error escapes the block.
    """
    try:
        yield
    except ManifestNotFoundError as e:
        print_error(escape(str(e)))
        print_info(f"Create a {MANIFEST_FILENAME} here, pass --config, or set {ROOT_ENV_VAR}.")
        raise typer.Exit(code=1) from e
    except ManifestError as e:
        print_error(f"Failed to load manifest: {escape(str(e))}")
        raise typer.Exit(code=1) from e
    except PathError as e:
        print_error(escape(str(e)))
        raise typer.Exit(code=1) from e
    except OSError as e:
        logger.debug("Aborting on I/O failure", exc_info=True)
        print_error(f"I/O failure: {escape(str(e))}")
        raise typer.Exit(code=1) from e


def open_reconciler(ctx: typer.Context) -> Reconciler:
    """Locate and load the manifest and bind a reconciler to it.

    Must be called inside :func:`fatal_errors`.

    Args:
        ctx: Typer context carrying the global options.

    Returns:
        Reconciler for the loaded manifest.
    """
    options = ctx.obj or {}
    explicit: Path | None = options.get("config")

    path = find_manifest(explicit, env_root=os.environ.get(ROOT_ENV_VAR))
    logger.debug("Using manifest %s", path)
    manifest = load_manifest(path)

    return Reconciler(manifest, LinkContext.from_environment(path, manifest))
