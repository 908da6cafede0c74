"""
L0 Data — Tool recipes for the bootstrap chain.

Pure data, no logic.  One entry per tool, in install order.

Recipe fields:
    label      display name
    cli        command whose presence on PATH means "installed"
               (None when presence is checked another way)
    presence   custom presence check id (see detection.presence)
    requires   tool that must be installed first, else skip
    methods    ordered install strategies: primary first, fallback second

Method fields:
    name       reported as ToolStatus.method on success
    adapter    "shell" (argv) or "powershell" (script)
    needs      package-manager command that must resolve to try this method
    steps      ordered argv lists / scripts; ``{python_version}`` is filled in
"""

from __future__ import annotations

CHOCOLATEY_INSTALL_SCRIPT = (
    "Set-ExecutionPolicy Bypass -Scope Process -Force; "
    "[System.Net.ServicePointManager]::SecurityProtocol = "
    "[System.Net.ServicePointManager]::SecurityProtocol -bor 3072; "
    "iex ((New-Object System.Net.WebClient).DownloadString("
    "'https://community.chocolatey.org/install.ps1'))"
)

# Registers the App Installer package shipped with Windows, which
# provides winget.exe.
WINGET_REGISTER_SCRIPT = (
    "Add-AppxPackage -RegisterByFamilyName "
    "-MainPackage Microsoft.DesktopAppInstaller_8wekyb3d8bbwe -ErrorAction Stop"
)

_WINGET_INSTALL = [
    "winget", "install", "--exact", "--silent",
    "--accept-source-agreements", "--accept-package-agreements", "--id",
]
_CHOCO_INSTALL = ["choco", "install", "-y", "--no-progress"]


TOOL_RECIPES: dict[str, dict] = {

    # ── Package managers ────────────────────────────────────────

    "chocolatey": {
        "label": "Chocolatey",
        "cli": "choco",
        "methods": [
            {
                "name": "install-script",
                "adapter": "powershell",
                "steps": [CHOCOLATEY_INSTALL_SCRIPT],
            },
        ],
    },
    "winget": {
        "label": "Winget",
        "cli": "winget",
        "methods": [
            {
                "name": "app-installer",
                "adapter": "powershell",
                "steps": [WINGET_REGISTER_SCRIPT],
            },
            {
                "name": "chocolatey",
                "adapter": "shell",
                "needs": "choco",
                "steps": [_CHOCO_INSTALL + ["winget-cli"]],
            },
        ],
    },

    # ── Toolchain ───────────────────────────────────────────────

    "uv": {
        "label": "uv",
        "cli": "uv",
        "methods": [
            {
                "name": "winget",
                "adapter": "shell",
                "needs": "winget",
                "steps": [_WINGET_INSTALL + ["astral-sh.uv"]],
            },
            {
                "name": "chocolatey",
                "adapter": "shell",
                "needs": "choco",
                "steps": [_CHOCO_INSTALL + ["uv"]],
            },
        ],
    },
    "python": {
        "label": "Python",
        "cli": None,
        "presence": "uv_python",
        "requires": "uv",
        "methods": [
            {
                "name": "uv",
                "adapter": "shell",
                "needs": "uv",
                "steps": [["uv", "python", "install", "{python_version}"]],
            },
        ],
    },
    "git": {
        "label": "Git",
        "cli": "git",
        "methods": [
            {
                "name": "winget",
                "adapter": "shell",
                "needs": "winget",
                "steps": [_WINGET_INSTALL + ["Git.Git"]],
            },
            {
                "name": "chocolatey",
                "adapter": "shell",
                "needs": "choco",
                "steps": [_CHOCO_INSTALL + ["git"]],
            },
        ],
    },
    "ansible": {
        "label": "Ansible",
        "cli": "ansible",
        "requires": "uv",
        "methods": [
            {
                "name": "uv",
                "adapter": "shell",
                "needs": "uv",
                "steps": [
                    ["uv", "tool", "install", "--python", "{python_version}",
                     "ansible-core"],
                    ["uv", "tool", "install", "--force", "--python", "{python_version}",
                     "--with-executables-from", "ansible-core", "ansible"],
                    # puts uv's tool bin directory on the user PATH
                    ["uv", "tool", "update-shell"],
                ],
            },
        ],
    },
}

INSTALL_ORDER: tuple[str, ...] = tuple(TOOL_RECIPES)
