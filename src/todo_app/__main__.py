# src/todo_app/__main__.py

from .cli.main import main

raise SystemExit(main())
