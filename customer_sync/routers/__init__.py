"""HTTP routers for the customer sync."""
