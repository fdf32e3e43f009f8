"""Path-derived identifiers for declared Go symbols.

An identifier is built from the declaring file's path relative to the
analysis root, with the extension dropped and separators turned into dots::

    pkg/server/http.go, Serve, Server  ->  pkg.server.http.Server.Serve
    main.go, run                       ->  main.run

Identifiers do not consult Go package names, so two directories sharing one
package produce distinct prefixes. Downstream consumers key on this exact
shape; both the symbol collector and the call resolver must go through
:func:`identifier_for`.
"""

from __future__ import annotations

import os


def module_path(relative_path: str) -> str:
    stem, _ = os.path.splitext(relative_path)
    for sep in {os.sep, os.altsep, "/"}:
        if sep:
            stem = stem.replace(sep, ".")
    return stem


def identifier_for(relative_path: str, name: str, enclosing_type: str = "") -> str:
    module = module_path(relative_path)
    if enclosing_type:
        return f"{module}.{enclosing_type}.{name}"
    return f"{module}.{name}"


def relative_to_root(root: str, path: str) -> str:
    try:
        return os.path.relpath(path, root)
    except ValueError:
        # Different drives on Windows.
        return path


def is_within_root(root: str, path: str) -> bool:
    if not os.path.isabs(path):
        path = os.path.join(root, path)
    rel = relative_to_root(root, os.path.normpath(path))
    if os.path.isabs(rel):
        return False
    return rel != ".." and not rel.startswith(".." + os.sep)
