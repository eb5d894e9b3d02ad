"""
Packaging script for PyPI.
"""
import setuptools

setuptools.setup(
	name='variety-unions',
	version='0.1.0',
	packages=['variety', "variety.tutorial", ],
	entry_points={
		'console_scripts': ["variety = variety.cmdline:main"],
	},
	license='MIT',
	description='Tagged unions with exhaustive, guard-refined matching, plus walk-throughs of the idea',
	long_description=open('README.md').read(),
	long_description_content_type="text/markdown",
	classifiers=[
		"Programming Language :: Python :: 3.12",
		"License :: OSI Approved :: MIT License",
		"Operating System :: OS Independent",
		"Development Status :: 3 - Alpha",
		"Intended Audience :: Developers",
		"Intended Audience :: Education",
		"Topic :: Software Development :: Libraries",
		"Topic :: Education",
		"Environment :: Console",
	],
	python_requires='>=3.11',
	install_requires=[
		"booze-tools>=0.6.2.1",
	]
)
