"""Actions used by llpkgstore workflows."""
