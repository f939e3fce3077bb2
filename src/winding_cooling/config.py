# material constants (Bluebook 2E, section 15)
SPECIFIC_HEAT_OF_OIL = 1880.0        # J/(kg*K)
OIL_DENSITY = 867.0                  # kg/m^3
OIL_CONDUCTIVITY = 0.11              # W/(m*K)
PAPER_CONDUCTIVITY = 0.16            # W/(m*K)
OIL_EXPANSION = 6.8e-4               # 1/K
GRAVITY = 9.80665                    # m/s^2

# resistance temperature coefficient (copper)
COPPER_T_REF = 234.5
RESISTANCE_REF_TEMP = 20.0

# starting temperatures
DEFAULT_DISC_TEMP = 20.0
DEFAULT_T_BOTTOM = 20.0
DEFAULT_T_TOP = 21.0

# convergence tolerances
DISC_TEMP_TOL = 0.1
SECTION_TEMP_TOL = 0.1
TOP_OIL_TOL = 0.1
FLOW_RTOL = 1e-3

# iteration caps
MAX_DISC_ITERS = 200
MAX_SECTION_ITERS = 200
MAX_COIL_ITERS = 200

# outer relaxation
P_RELAX = 0.5
V_RELAX = 0.5

# floors
MIN_OIL_VELOCITY = 1e-4              # m/s, convection in stagnant ducts
MIN_BUOYANCY_DT = 0.1
LEGACY_MIN_DT = 1.0
EPS = 1e-12

# coil defaults (m)
DUCT_DIMN = 0.00635
STICK_WIDTH = 0.01905
NUM_STICKS = 44
