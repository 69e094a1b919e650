from setuptools import setup, find_packages

setup(
    name="exactmatrix",
    version="1.0",
    description="Dense exact matrix algebra for symbolic computation",
    long_description=("Dense matrices of exact, possibly symbolic entries with determinants, ranks, inverses, "
                      "characteristic polynomials and linear system solving over rational function fields"),
    long_description_content_type="text/plain",
    license="Apache License 2.0",
    python_requires=">=3.7",
    packages=find_packages(include=["exactmatrix", "exactmatrix.*"]),
    install_requires=["sympy", "numpy", "scipy"],
    extras_require={"test": ["pytest", "pytest-timeout"]},
    classifiers=[
        "Intended Audience :: Science/Research", "Development Status :: 3 - Alpha", "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10", "Programming Language :: Python :: 3.11", "Programming Language :: Python :: 3.12",
        "Natural Language :: English", "Operating System :: OS Independent", "Topic :: Scientific/Engineering :: Mathematics"
    ],
    keywords=["linear algebra", "determinant", "exact arithmetic", "computer algebra"],
    zip_safe=False,
)
