"""Navigation — collaborator protocols, target resolution, execution, and delays."""
