from setuptools import find_packages, setup

setup(
  name="speccheck",
  version="0.1.0",
  description="Ed25519 signature verification edge case test vectors",
  long_description=open("README.md").read(),
  long_description_content_type="text/markdown",
  packages=find_packages(include=["speccheck", "speccheck.*"]),
  python_requires=">=3.9",
  classifiers=[
    "Programming Language :: Python :: 3",
    "License :: OSI Approved :: Apache Software License",
    "Operating System :: OS Independent",
  ],
  install_requires=[
    "colorama>=0.4",
    "cryptography>=35",
    "pynacl>=1.4",
    "tqdm>=4.62",
  ],
  extras_require={
    "test": ["pytest", "pytest-sugar", "pytest-mock", "coverage", "mypy", "bandit"],
    "dev": ["tox", "isort", "yapf"],
  },
  entry_points=dict(console_scripts=["speccheck = speccheck.__main__:main"],),
)
