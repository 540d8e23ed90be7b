"""
friendkb: data-access layer for a personal relationship-tracking application.

The package exposes a generic async repository contract, six entity repositories
that share one connection pool through a `RepositoryContext`, and an error
classifier that turns raw store errors into a small set of semantic exceptions.

Usage:
    from friendkb.database import RepositoryContext
    from friendkb.repositories import UserRepository, FriendRepository

    ctx = RepositoryContext.from_settings(get_settings())
    users = UserRepository(ctx)
    friends = FriendRepository(ctx.clone())
"""
