from setuptools import setup, find_packages

setup(
    name='indexstore',
    version='1.0.0',
    packages=find_packages(include=['indexstore', 'indexstore.*']),
    entry_points={
        'console_scripts': [
            'indexstore=indexstore.cli.driver_cli:main',
        ],
    },
    extras_require={
        'test': ['pytest'],
    },
    python_requires='>=3.7',
)
