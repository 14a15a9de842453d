[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "chifkit"
version = "0.15.10"
description = "Engine core utilities: backlog logging, inline breakpoints, a worker-thread job system and bitmap-font text layout"
requires-python = ">=3.10"
dependencies = ["numpy"]
keywords = ["engine", "job-system", "logging", "font-atlas", "text-layout", "word-wrap"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Libraries :: Application Frameworks",
    "Topic :: Games/Entertainment",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["chifkit"]

[tool.pytest.ini_options]
addopts = "-ra"
