"""FieldTrack package.

Feature modules (users, visits, dashboard) sit on a thin Flask controller layer
and plain service/repository layers; the remote store is reached over HTTP.
"""
