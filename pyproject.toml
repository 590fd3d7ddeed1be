[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "nvdtools"
version = "0.1.0"
description = "Building blocks for vulnerability data: RPM version handling, NVD CVE JSON feeds, SQL record helpers and vendor feed converters"
requires-python = ">=3.10"
dependencies = []
keywords = ["nvd", "cve", "vulnerability", "rpm", "security", "vfeed", "snyk"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["nvdtools"]

[tool.pytest.ini_options]
addopts = "-ra"
