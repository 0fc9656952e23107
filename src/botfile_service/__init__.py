"""
GameATron 4000 bot-file service (AWS Lambda)

Where: Lambda behind a Function URL / API Gateway, called by the game's launcher.
What:  Point a pre-registered Azure bot service at the caller's endpoint, fetch
       its DirectLine secret, and publish a .bot file to S3.
Why:   Lets each game instance run against its own bot registration without
       handing out Azure credentials.
"""

__all__ = [
    "arm",
    "auth",
    "botfile",
    "config",
    "errors",
    "handler",
    "logs",
    "provisioner",
    "publisher",
    "request",
    "resources",
    "transport",
]
