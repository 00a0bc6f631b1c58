from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="folio",
    version="0.1.0",
    description="A single-admin portfolio site for Flask: profile, education, certificates and achievements",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Topic :: Internet :: WWW/HTTP :: Dynamic Content",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Framework :: Flask",
    ],
    python_requires=">=3.9",
    install_requires=[
        "Flask>=3.0.0",
        "Flask-CORS>=4.0.0",
        "python-dotenv>=1.0.0",
        "requests>=2.28.0",
        "Authlib>=1.2.0",
        "boto3>=1.26.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
            "pytest-flask>=1.2",
            "black>=22.0",
            "flake8>=5.0",
        ],
    },
    include_package_data=True,
    package_data={
        "folio": [
            "modules/*/templates/**/*.html",
        ],
    },
    zip_safe=False,
)
