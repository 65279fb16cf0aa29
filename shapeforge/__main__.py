from shapeforge.cli import main

raise SystemExit(main())
