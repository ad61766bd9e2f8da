from trichart.cli import main

raise SystemExit(main())
