"""Version comparison, update state, release providers, installers and the upgrade service."""