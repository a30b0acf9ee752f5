"""Import support first so the test database settings win over any .env file."""

import support  # noqa: F401
