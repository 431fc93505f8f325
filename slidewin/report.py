from termcolor import colored
from texttable import Texttable

from slidewin.planner import resampled_shape, round_half_up


###############################################################################
# Prints a single-line progress bar, redrawn in place on every call.
#
# Parameters:
# iteration (int): number of steps done so far
# total (int): number of steps in the run
# prefix, suffix (str): text printed before and after the bar
# decimals (int): decimals shown in the percentage
# length (int): width of the bar in characters
# fill (str): character for the done part of the bar
# print_end (str): line ending, "\r" keeps the bar on one line
###############################################################################
def print_progress_bar(iteration, total, prefix='', suffix='', decimals=1, length=100, fill='█', print_end="\r"):
    done = iteration / float(total)
    filled = int(length * iteration // total)
    bar = fill * filled + '-' * (length - filled)
    percent = ("{0:." + str(decimals) + "f}").format(100 * done)

    print(colored('\r%s |%s| %s%% %s' % (prefix, bar, percent, suffix), 'cyan', attrs=['bold']), end=print_end)

    # finish the line once the run is complete
    if iteration == total:
        print()


###############################################################################
# Builds a table describing every scale of a plan.
#
# Parameters:
# plan (ScalePlan): planned scales
# image_shape (tuple): shape of the original image
# window_size (tuple): (win_rows, win_cols) in resampled pixels
# counts (list): number of windows produced per scale, optional
#
# Returns:
# t (Texttable): the summary table
###############################################################################
def plan_summary(plan, image_shape, window_size, counts=None):
    win_rows, win_cols = window_size
    t_Table = [['Scale', 'Factor', 'Resampled Size', 'Window In Image', 'Windows']]

    for s, scale in enumerate(plan.scales):
        rows, cols = resampled_shape(image_shape[0], image_shape[1], scale)
        windows = counts[s] if counts is not None else '-'
        t_Table.append([s, scale, str(cols) + " x " + str(rows),
                        str(round_half_up(win_cols * scale)) + " x " + str(round_half_up(win_rows * scale)), windows])

    t_Table.append(['Total', '', '', 'Upper Bound ' + str(plan.max_windows),
                    sum(counts) if counts is not None else '-'])

    t = Texttable(180)
    t.add_rows(t_Table)
    return t


def print_plan_summary(plan, image_shape, window_size, counts=None):
    t = plan_summary(plan, image_shape, window_size, counts)
    print(colored(t.draw(), 'yellow', attrs=['bold']))
