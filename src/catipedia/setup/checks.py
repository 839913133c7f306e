"""Check primitives shared by the setup requirement and health-check steps."""

from __future__ import annotations

import json
import platform
import shutil
from dataclasses import dataclass
from pathlib import Path

from packaging.version import InvalidVersion, Version

from catipedia.shell import CommandRunner


@dataclass(frozen=True, slots=True)
class CheckResult:
    name: str
    passed: bool
    message: str
    fix_hint: str = ""
    required: bool = True


def check_tool_exists(name: str, *, required: bool = True) -> CheckResult:
    found = shutil.which(name) is not None
    return CheckResult(
        name=f"{name} on PATH",
        passed=found,
        message=f"{name} found" if found else f"{name} not found",
        fix_hint=f"Install {name} and ensure it is on your PATH.",
        required=required,
    )


def parse_node_version(raw: str) -> Version | None:
    try:
        return Version(raw.strip().lstrip("v"))
    except InvalidVersion:
        return None


def check_node_version(
    runner: CommandRunner, min_major: int, node_bin: str = "node"
) -> CheckResult:
    name = f"Node.js version is >= {min_major}"
    result = runner.run([node_bin, "--version"], capture=True)
    if not result.ok:
        return CheckResult(
            name=name,
            passed=False,
            message=result.detail() or f"{node_bin} exited with {result.exit_code}",
            fix_hint=f"Install Node.js {min_major} or newer.",
        )
    version = parse_node_version(result.stdout)
    if version is None:
        return CheckResult(
            name=name,
            passed=False,
            message=f"unrecognised version string {result.stdout.strip()!r}",
            fix_hint=f"Install Node.js {min_major} or newer.",
        )
    ok = version.major >= min_major
    return CheckResult(
        name=name,
        passed=ok,
        message=f"Node.js {version} on {platform.system()} {platform.machine()}",
        fix_hint=f"Node.js {version.major} is not supported. Upgrade to {min_major} or newer.",
    )


def check_file(root: Path, relative: str, *, required: bool) -> CheckResult:
    found = (root / relative).is_file()
    kind = "required" if required else "optional"
    return CheckResult(
        name=relative,
        passed=found,
        message="found" if found else f"missing ({kind})",
        required=required,
    )


def check_package_scripts(root: Path) -> CheckResult:
    path = root / "package.json"
    name = "package.json scripts"
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return CheckResult(name=name, passed=False, message="package.json missing", required=False)
    except OSError as exc:
        return CheckResult(
            name=name,
            passed=False,
            message=f"unreadable package.json: {exc}",
            fix_hint="Check that package.json is a readable file.",
        )
    except ValueError as exc:
        # JSONDecodeError and UnicodeDecodeError
        return CheckResult(
            name=name,
            passed=False,
            message=f"invalid JSON in package.json: {exc}",
            fix_hint="Fix the JSON syntax in package.json.",
        )
    scripts = data.get("scripts") if isinstance(data, dict) else None
    if not scripts:
        return CheckResult(
            name=name,
            passed=False,
            message="no scripts section in package.json",
            fix_hint='Add "build" and "test" entries under "scripts".',
            required=False,
        )
    return CheckResult(name=name, passed=True, message=", ".join(sorted(scripts)))
