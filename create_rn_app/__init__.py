"""create-rn-app -- scaffold React Native applications from a template.

The package derives identifier variants from the project name, renders the
bundled template tree into a new project directory, and writes a pinned
``package.json``.  Use it from the command line (``create-rn-app my-app``) or
drive :class:`create_rn_app.scaffolder.ProjectGenerator` directly.
"""

__version__ = "0.1.0"
