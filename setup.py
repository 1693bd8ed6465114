from setuptools import find_packages, setup

setup(
    name="progquik",
    version="0.1.0",
    description="Low-overhead progress indicators for long-running, multi-threaded computations",
    packages=find_packages(include=["progquik", "progquik.*"]),
    python_requires=">=3.10",
    install_requires=["tracerite"],
    extras_require={"test": ["pytest"]},
    entry_points={"console_scripts": ["progquik = progquik.cli:main"]},
)
