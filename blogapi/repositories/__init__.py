# Repositories package.
#
# Each module exposes async functions that own the SQL and row shaping for
# one table:
#
#   post_repository     - posts, their likes counter, and the detail view
#                         with nested comments
#   comment_repository  - append-only comment creation
#   user_repository     - account creation and credential lookup
#
# All repository functions accept the AsyncEngine as their first argument
# and check a connection out of its pool for the duration of the call, so
# every call is its own unit of work.
