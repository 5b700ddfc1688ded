from setuptools import setup, find_namespace_packages

setup(
    name="sugarscape",
    version="0.1",
    packages=find_namespace_packages(where="src", include=["sugarscape*"]),
    package_dir={"": "src"},
    description="Epstein-Axtell SugarScape gridworld: agents forage regrowing sugar, age, die and are replaced.",
    python_requires=">=3.10",
    install_requires=[
        "numpy",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "sugarscape=sugarscape.core.run:main",
        ],
    },
)
