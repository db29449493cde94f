import os
import pathlib
import sys

from setuptools import extension as setuptools_ext
from setuptools import setup
from setuptools.command import build_ext as setuptools_build_ext


_ROOT = pathlib.Path(__file__).parent


with open(str(_ROOT / "README.rst")) as f:
    readme = f.read()


with open(str(_ROOT / "calcparse" / "_version.py")) as f:
    for line in f:
        if line.startswith("__version__ ="):
            _, _, version = line.partition("=")
            VERSION = version.strip(" \n'\"")
            break
    else:
        raise RuntimeError(
            "unable to read the version from calcparse/_version.py"
        )


USE_MYPYC = False
MYPY_DEPENDENCY = "mypy>=0.910"
setup_requires = []
ext_modules = []

if (
    os.environ.get("CALCPARSE_USE_MYPYC", None) in {"true", "1", "on"}
    or "--use-mypyc" in sys.argv
):
    setup_requires.append(MYPY_DEPENDENCY)
    # setuptools only runs build_ext when there is at least one extension;
    # mypycify() replaces this placeholder.
    ext_modules.append(
        setuptools_ext.Extension("calcparse.foo", ["calcparse/foo.c"])
    )
    USE_MYPYC = True


class build_ext(setuptools_build_ext.build_ext):  # type: ignore
    def finalize_options(self) -> None:
        # finalize_options() may be called more than once on the same
        # command object.
        if getattr(self, "_initialized", False):
            return

        if USE_MYPYC:
            try:
                import mypy.version
                from mypyc.build import mypycify
            except ImportError:
                raise RuntimeError(
                    "please install {} to compile calcparse".format(
                        MYPY_DEPENDENCY
                    )
                )

            mypyVersion = tuple(
                int(part) for part in mypy.version.__version__.split(".")[:2]
            )
            if mypyVersion < (0, 910):
                raise RuntimeError(
                    "calcparse requires {}, got mypy=={}".format(
                        MYPY_DEPENDENCY, mypy.version.__version__
                    )
                )

            # The table and the grammar objects are the hot path of the
            # parser driver.
            self.distribution.ext_modules = mypycify(
                [
                    "calcparse/automaton.py",
                    "calcparse/grammar.py",
                ],
            )

        super(build_ext, self).finalize_options()


setup(
    name="calcparse",
    version=VERSION,
    python_requires=">=3.8.0",
    license="MIT",
    description="A table driven SLR(1) lexer, parser and evaluator for "
    "arithmetic expressions.",
    long_description=readme,
    long_description_content_type="text/x-rst",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Topic :: Software Development :: Compilers",
        "Topic :: Scientific/Engineering :: Mathematics",
    ],
    packages=["calcparse", "calcparse.tests"],
    package_data={"calcparse": ["py.typed"]},
    install_requires=["mypy_extensions"],
    setup_requires=setup_requires,
    ext_modules=ext_modules,
    extras_require={
        "test": [
            "flake8",
            MYPY_DEPENDENCY,
        ]
    },
    entry_points={
        "console_scripts": ["calcparse = calcparse.__main__:main"],
    },
    cmdclass={"build_ext": build_ext},
)
