"""
reactstarter.templates - Jinja2 Template Files
==============================================

Source files written by the feature composers. Templates use the ``.j2``
extension and are rendered with ``composers.base.render_template``.

Available Templates
-------------------
i18n:
    - i18n.ts.j2: i18next initialization (backend, detector, resources)
    - i18n.d.ts.j2: ``CustomTypeOptions`` augmentation for typed keys

Auth pages:
    - auth_layout.tsx.j2: pathless layout route rendering ``<Outlet />``
    - auth_page.tsx.j2: placeholder leaf route (login, register)

Template Context
----------------
i18n templates receive ``locales`` (list of locale codes, fallback first)
and ``fallback`` (the fallback locale). Auth templates receive ``layout``
(route id of the layout, e.g. ``/_layout_auth``) and, for pages,
``route_path``.
"""

# Templates are loaded by Jinja2's PackageLoader.
