"""WelwExpress marketplace backend."""
