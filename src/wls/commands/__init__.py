"""Click plumbing for the wls front end — command class and shared context."""
