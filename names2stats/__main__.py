from names2stats.cli import main

raise SystemExit(main())
