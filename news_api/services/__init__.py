# Services package.
#
# Each module exposes a focused set of async functions that encapsulate
# business logic and database access for a single domain aggregate:
#
#   article_service: listing, detail, create, votes, delete for Article
#   comment_service: per-article listing, create, votes, delete for Comment
#   topic_service: list and create for Topic
#   user_service: list and lookup for User
#
# All service functions accept an AsyncSession as their first argument
# so that the router layer controls the transaction boundary via the
# ``get_db`` dependency.
