"""Project bootstrapping, agent directory detection and the managed AGENTS.md file."""