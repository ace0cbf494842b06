from setuptools import setup, find_packages


setup(
    name="splitmd5",
    version="0.1",
    packages=find_packages(include=["splitmd5", "splitmd5.*"]),
    description="Incremental MD5 over discontiguous buffers, with a two-buffer digest entry point.",
    author="vercingetorx",
    python_requires=">=3.9",
    install_requires=[
        "pycryptodomex>=3.23.0",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "splitmd5=splitmd5.cli:main",
        ]
    },
)
