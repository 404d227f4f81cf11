from setuptools import find_namespace_packages, setup

setup(
    name="machinekeysync",
    version="1.0.0",
    description="Repair machine key container filenames after a sysprep identity change",
    author="Ashiq Gazi",
    python_requires=">=3.9",
    packages=find_namespace_packages(include=["src", "src.*"]),
    py_modules=["config", "machinekeysync"],
    install_requires=[
        "tqdm>=4.60",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "machinekeysync=machinekeysync:main",
        ],
    },
)
