from cppdocgen.cli import main

raise SystemExit(main())
