"""
API test package for the task tracker.

Tests use the Flask test client and demonstrate:
- Authentication and profile endpoints
- Project and task CRUD through HTTP
- Pagination, sorting and filtering
- Error envelope verification
"""
