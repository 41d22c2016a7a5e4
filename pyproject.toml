[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "syslab"
version = "0.1.0"
description = "POSIX systems programming exercises: diff blocks, parallel matrix multiplication, directory listing and signals"
requires-python = ">=3.10"
dependencies = []
keywords = ["posix", "processes", "signals", "directories", "matrices", "diff"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: POSIX",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
syslab-blocks = "syslab.report:main"
syslab-dirlist = "syslab.dirlist:main"
syslab-generate = "syslab.matrices:main_generate"
syslab-check = "syslab.matrices:main_check"
syslab-multiply = "syslab.multiply:main"
syslab-dirwatch = "syslab.dirwatch:main"
syslab-signals = "syslab.signaltable:main"
syslab-pingpong = "syslab.pingpong:main"

[tool.hatch.build.targets.wheel]
packages = ["syslab"]

[tool.pytest.ini_options]
addopts = "-ra"
