from format_plugin.cli import main

raise SystemExit(main())
