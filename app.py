"""Application entry point."""
import os
from inkwell import create_app
from inkwell.extensions import db
from inkwell.models import Category, Comment, Post, Tag, User

# Create the Flask application
app = create_app(os.getenv("FLASK_ENV"))

# Create application context for CLI commands
@app.shell_context_processor
def make_shell_context():
    """Make shell context for flask shell command."""
    return {
        "db": db,
        "User": User,
        "Post": Post,
        "Category": Category,
        "Tag": Tag,
        "Comment": Comment,
    }

if __name__ == "__main__":
    app.run(host="0.0.0.0", port=8000, debug=True)
