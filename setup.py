import setuptools

with open("README.md", "r") as f:
    long_description = f.read()

setuptools.setup(
    name="toricproj",
    version="0.1.0",
    author="Liam McAllister Group",
    author_email="",
    description="A software package for constructing projective bundles over toric varieties.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=setuptools.find_packages(exclude=["tests", "tests.*"]),
    license="GNU General Public License (GPL)",
    python_requires='>=3.9',
    install_requires=["numpy", "scipy", "python-flint", "pplpy"],
    extras_require={"test": ["pytest"]},
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: GNU General Public License (GPL)",
        "Operating System :: OS Independent",
    ]
)
