from setuptools import setup, find_packages
from pathlib import Path

setup(
    name="shape_selectors",
    version=Path("./shape_selectors/VERSION").read_text().strip(),
    packages=find_packages(include=["shape_selectors", "shape_selectors.*"]),
    package_data={"shape_selectors": ["VERSION"]},
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "opencv-python",
        "easydict",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": ["shape_selectors=shape_selectors.cli:main"],
    },
)
