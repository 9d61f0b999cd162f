"""Server-rendered AIssist pages.

Static dashboards rendered from Jinja templates:
- /admin (and /): full admin dashboard
- /dashboard: compact dashboard
- /demo: demo page, overridable by dropping demo.html into the pages dir

All numbers shown are mock values.
"""
