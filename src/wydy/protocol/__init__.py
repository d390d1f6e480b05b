"""Remote execution protocol between the short-lived requester and the daemon.

One persistent byte stream, strict turn-taking, one outstanding request.
"""
