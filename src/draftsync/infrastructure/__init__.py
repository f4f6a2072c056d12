"""Infrastructure layer — reference content stores and translation directories.

These implement the collaborator protocols in
:mod:`draftsync.services.contracts`. Hosts with their own content system
provide their own implementations instead.
"""
