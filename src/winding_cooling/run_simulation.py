from __future__ import annotations

import argparse
import logging
from typing import List, Optional

from winding_cooling.design import (
    REF_AMPS,
    REF_COOLING_OFFSET,
    REF_DISC_COUNTS,
    REF_RAD_HEIGHT,
    make_reference_coil,
)
from winding_cooling.errors import CoolingModelError
from winding_cooling.physics import ModelParams, RelaxationParams
from winding_cooling.types import ConvergenceCriterion

logger = logging.getLogger("winding_cooling")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        description="Steady-state oil flow and temperatures of the reference LV disc winding"
    )
    ap.add_argument("--amps", type=float, default=REF_AMPS)
    ap.add_argument("--t-bottom", type=float, default=20.0, help="bottom ambient oil [C]")
    ap.add_argument("--t-top", type=float, default=25.0, help="top ambient oil estimate [C]")
    ap.add_argument("--cooling-offset", type=float, default=REF_COOLING_OFFSET, help="radiator inlet height [m]")
    ap.add_argument("--rad-height", type=float, default=REF_RAD_HEIGHT, help="radiator height [m]")
    ap.add_argument("--discs", type=int, nargs="+", default=list(REF_DISC_COUNTS),
                    help="disc count per section, bottom first")
    ap.add_argument("--criterion", choices=[c.value for c in ConvergenceCriterion],
                    default=ConvergenceCriterion.TOP_OIL.value)
    ap.add_argument("--p-relax", type=float, default=0.5)
    ap.add_argument("--v-relax", type=float, default=0.5)
    ap.add_argument("--repeat", type=int, default=1,
                    help="reruns feeding the top oil back as the top boundary")
    ap.add_argument("-v", "--verbose", action="store_true")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        params = ModelParams(relax=RelaxationParams(pressure=args.p_relax, velocity=args.v_relax))
        coil = make_reference_coil(disc_counts=args.discs, amps=args.amps, params=params)
        logger.info("Coil: %d sections, height %.4f m, cold loss %.1f W",
                    len(coil.sections), coil.height(), coil.loss())
        base = coil.sections[0]
        sf_inner, sf_outer = coil.stick_space_factors()
        logger.info("Space factors from layout: spacers %.3f, inner sticks %.3f, outer sticks %.3f",
                    base.spacer_space_factor(base.discs[0]), sf_inner, sf_outer)

        t_top = args.t_top
        for run in range(1, args.repeat + 1):
            res = coil.simulate_thermal_with_temps(
                args.t_bottom, t_top, args.cooling_offset, args.rad_height,
                criterion=ConvergenceCriterion(args.criterion),
            )
            logger.info(
                "Run %d: loss %.1f W; top oil %.2f C; hot spot %.2f C; outflow %.4g m^3/s (%d iterations)",
                run, res.loss, res.top_oil_temp, res.hot_spot, res.outflow_rate, res.iterations,
            )
            t_top = res.top_oil_temp

        k, i, t_max = coil.hottest_disc()
        logger.info("Hottest disc: section %d, disc %d at %.2f C", k, i, t_max)
    except CoolingModelError as exc:
        logger.error("Thermal simulation failed: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
