"""
Package setup for the water ripple background.

The package lives under plugins/ without an __init__.py, so it is listed
explicitly rather than discovered.
"""

from setuptools import setup


setup(
    name="water-ripples",
    version="0.1.0",
    description="Interactive water-ripple background: 2D grid wave simulation with a pygame viewer",
    python_requires=">=3.9",
    package_dir={"": "plugins"},
    packages=["water_ripples"],
    install_requires=[
        "numpy",
        "pygame",
        "Pillow",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "water-ripples=water_ripples.__main__:main",
        ],
    },
)
