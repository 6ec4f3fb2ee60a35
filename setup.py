import setuptools

# Project metadata and dependencies are listed in pyproject.toml
# [project] ; the numba kernels are compiled at first call, no extension
# module is built here.

setuptools.setup()
