from obsidized.cli import main

raise SystemExit(main())
