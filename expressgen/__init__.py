"""expressgen -- scaffolding generator for Express web applications.

Writes a runnable application skeleton (``app.js``, ``bin/www``,
``package.json``, static assets, routes and views) into a target directory.

Quick usage::

    express-gen --view ejs ./my-app
    python -m expressgen.cli --no-view ./api
"""

__version__ = "1.0.0"
