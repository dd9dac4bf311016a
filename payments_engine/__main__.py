from payments_engine.cli import main

raise SystemExit(main())
