"""User domain module.

Identity of the people who own meal plans. Auth0 is the source of truth for
credentials; the app keeps a thin user record keyed by the Auth0 subject.
"""
