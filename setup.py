from setuptools import find_packages, setup

setup(
    name='quickssh',
    version='0.2.0',
    description='Terminal UI for keeping SSH host shortcuts and connecting to them',
    packages=find_packages(include=['quickssh', 'quickssh.*']),
    python_requires='>=3.11',
    install_requires=[
        'textual>=0.47',
        'rich',
        'tomli-w>=1.0',
        'paramiko>=2.7',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'quickssh = quickssh.tui:main',
        ],
    },
)
