import os
import platform
import sys
from importlib.metadata import PackageNotFoundError, version

from .._min_dependencies import dependent_pkgs


def _get_sys_info():
    """
    Get the interpreter and platform information.

    Returns
    -------
    dict
        Version and path of the Python interpreter, and platform name.
    """
    return {
        "python": sys.version.replace(os.linesep, " "),
        "executable": sys.executable,
        "machine": platform.platform(),
    }


def _get_deps_info():
    """
    Get the installed versions of trscp and of its runtime dependencies.

    The runtime dependencies are the packages tagged ``install`` in
    `trscp._min_dependencies`, so that the report follows the requirements
    declared by the setup script.

    Returns
    -------
    dict
        Installed version of each package, or None if it is not installed.
    """
    deps = ["trscp", "setuptools", "pip"]
    deps.extend(pkg for pkg, (_, tags) in dependent_pkgs.items() if "install" in tags.split(", "))
    deps_info = {}
    for pkg in deps:
        try:
            deps_info[pkg] = version(pkg)
        except PackageNotFoundError:
            deps_info[pkg] = None
    return deps_info


def show_versions():
    """
    Print the versions of trscp, of its dependencies, and of the interpreter.

    This information is useful when reporting a failure of the linear
    programming solver, whose behavior depends on the installed SciPy.
    """
    print("System settings")
    print("---------------")
    sys_info = _get_sys_info()
    sys_width = max(map(len, sys_info.keys())) + 1
    for k, stat in sys_info.items():
        print(f"{k:>{sys_width}}: {stat}")

    print()
    print("Python dependencies")
    print("-------------------")
    deps_info = _get_deps_info()
    deps_width = max(map(len, deps_info.keys())) + 1
    for k, stat in sorted(deps_info.items()):
        print(f"{k:>{deps_width}}: {stat}")
