# SPDX-License-Identifier: Apache-2.0

"""
Domain logic package for the Vot Romania platform.

This package contains the polling station resolution engine and the
content session state machine. Domain functions are pure and testable
without external dependencies.
"""
