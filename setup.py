from setuptools import setup


setup(
    name='switchbox',
    version='0.0.1',
    description='A duplex stream whose backing stream can be switched at runtime, '
                'with optional buffering while detached.',
    url='',
    author='',
    author_email='',
    license='LGPL',
    package_dir={'': 'src'},
    packages=['switchbox', 'switchbox.config', 'switchbox.stream', 'switchbox.support'],
    package_data={'switchbox.config': ['*.cfg']},
    python_requires='>=3.6',
    install_requires=[
        'configobj>=5.0.9',
    ],
    extras_require={
        'test': ['PyHamcrest', 'pytest'],
    },
    zip_safe=False,
)
