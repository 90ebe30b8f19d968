import setuptools

setuptools.setup(
    name='gscli',
    version='0.1',
    license='MIT',
    zip_safe=False,
    packages=setuptools.find_packages(include=['gscli', 'gscli.*']),
    fullname='GS-style command-line grammar',
    python_requires='>=3.8',
    package_data={'gscli.examples': ['templates/*.mako']},
    install_requires=[
        'pyyaml', 'rich', 'mako', 'rapidfuzz', 'fastjsonschema'
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'gs-chart = gscli.examples.chart:main',
        ],
    },
    description='Declarative clause-based argument parsing and tab-completion for tabular data tools.',
)
