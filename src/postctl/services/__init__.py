"""Service layer: linting and read-only queries over the content tree.

Every public service method returns a :class:`~postctl.services.result.ServiceResult`.
"""
