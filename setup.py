import setuptools

required = [
    "numpy>=1.17.0",
    "pandas>=0.25.0",
]

extras = {
    'additional': [
        'matplotlib',
    ]
}

with open("README.md", "r") as fh:
    long_description = fh.read()

setuptools.setup(
    name="ChartSeries",
    version="0.1.0",
    description="Synthetic data series for exercising chart rendering",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=setuptools.find_packages(exclude=["tests", "tests.*", "docs"]),
    license="MIT",
    include_package_data=True,
    install_requires=required,
    extras_require=extras,
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires='>=3.7',
)
