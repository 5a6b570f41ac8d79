from ats_engine.cli import main

raise SystemExit(main())
