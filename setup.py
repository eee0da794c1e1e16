#!/usr/bin/env python
# encoding: utf-8

from setuptools import setup

setup(
    name='ecboracle',
    description='Byte-at-a-time ECB decryption against an encryption oracle.',
    version='0.1',

    license='MIT',

    author='aldur',
    author_email='adrianodl@hotmail.it',

    packages=['ecboracle'],
    install_requires=[
        'pycryptodome',
        'colorama'
    ],

    scripts=['bin/ecboracle'],

    zip_safe=False,
    include_package_data=True,
)
