from setuptools import setup, find_packages

setup(
    name='awesome-report',
    version='1.0.0',
    description='JSON and HTML test-run reports for pytest',
    packages=find_packages(exclude=['tests', 'tests.*']),
    package_data={
        'awesome_report': [
            'config.schema.json',
            'templates/*.html',
            'templates/styles/*.scss',
        ],
    },
    python_requires='>=3.9',
    install_requires=[
        'PyYAML>=6.0',
        'jsonschema>=4.19.0',
        'Jinja2>=3.1.0',
        'libsass>=0.22.0',
        'arrow>=1.3.0',
        'XStatic-Bootstrap-SCSS>=3.4.1.0',
        'pytest>=7.4.0',
    ],
    extras_require={
        'dev': [
            'hypothesis>=6.88.0',
            'mypy>=1.5.0',
            'types-PyYAML>=6.0.0',
        ],
    },
)
