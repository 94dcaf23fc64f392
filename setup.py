import os.path
import re

from setuptools import find_namespace_packages, setup

VERSION_RE = re.compile(r"""__version__ = ['"]([0-9.]+)['"]""")
BASE_PATH = os.path.dirname(__file__)


with open(os.path.join(BASE_PATH, "httpgram", "__init__.py")) as f:
    try:
        version = VERSION_RE.search(f.read()).group(1)
    except IndexError:
        raise RuntimeError("Unable to determine version.")


with open(os.path.join(BASE_PATH, "README.md")) as readme:
    long_description = readme.read()


setup(
    name="httpgram",
    description="A small HTTP/1.x server built around "
    "a recursive-descent request parser.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="MIT",
    version=version,
    packages=find_namespace_packages(include=["httpgram*"]),
    python_requires=">=3.6",
    install_requires=["curio>=1.0", "iofree>=0.2.4", "httptools"],
    extras_require={"test": ["pytest", "coverage", "pytest-cov"]},
    entry_points={"console_scripts": ["httpgram = httpgram.__main__:main"]},
    classifiers=[
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
    ],
    tests_require=["pytest", "coverage", "pytest-cov"],
)
