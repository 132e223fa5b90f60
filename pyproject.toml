[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rvkit"
version = "0.1.0"
description = "RISC-V Sv39 paging model, ELF headers, a shell command parser and small Unix-style utilities"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "risc-v",
    "sv39",
    "page-table",
    "elf",
    "operating-system",
    "shell",
    "grep",
    "malloc",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Operating System",
    "Topic :: Education",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
rvkit-cat = "rvkit.cat:main"
rvkit-echo = "rvkit.echo:main"
rvkit-grep = "rvkit.grep:main"
rvkit-wc = "rvkit.wc:main"
rvkit-ls = "rvkit.ls:main"
rvkit-ln = "rvkit.ln:main"
rvkit-mkdir = "rvkit.mkdir:main"
rvkit-rm = "rvkit.rm:main"
rvkit-kill = "rvkit.kill:main"
rvkit-threadtest = "rvkit.threadtest:main"

[tool.hatch.build.targets.wheel]
packages = ["rvkit"]

[tool.hatch.build.targets.sdist]
include = ["rvkit", "tests", "pyproject.toml", "README.md"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
