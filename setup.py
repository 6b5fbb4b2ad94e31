from setuptools import setup, find_packages

setup(
    name="raster-distance",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*", "utils"]),
    install_requires=[
        "torch>=1.9.0",
        "matplotlib",
        "numpy",
        "pillow",
        "zarr",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "euclidean-distance=raster_distance.cli:main",
        ],
    },
    author="Raster Distance Team",
    description="Shih and Wu two-scan Euclidean distance transform for raster grids",
    keywords="raster, gis, distance transform, euclidean distance",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "Programming Language :: Python :: 3",
        "Topic :: Scientific/Engineering :: GIS",
    ],
    python_requires=">=3.8",
)
