[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hierlog"
version = "1.0.0"
description = "Hierarchical category logging with appenders, layouts, filters and property-file configuration"
requires-python = ">=3.10"
dependencies = []
keywords = ["logging", "category", "appender", "layout", "syslog", "configuration"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Logging",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["hierlog"]

[tool.pytest.ini_options]
addopts = "-ra"
