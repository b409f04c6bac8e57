from gh_inbox.cli import main

raise SystemExit(main())
